# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for the web integration: middleware, TransformerResponse, app."""

from dataclasses import dataclass

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from response_transformer.main import create_app
from response_transformer.middleware import RequestContextMiddleware
from response_transformer.responses import TransformerResponse, morph
from response_transformer.serializer import BaseTransformer
from response_transformer.transformer import TransformerRegistry, get_transformer_registry


@dataclass
class Author:
    id: int
    name: str


@dataclass
class Article:
    id: int
    title: str
    author: Author


class AuthorTransformer(BaseTransformer):
    def transform(self, author):
        return {"id": author.id, "name": author.name}


class ArticleTransformer(BaseTransformer):
    available_includes = ("author",)

    def transform(self, article):
        return {"id": article.id, "title": article.title}

    def include_author(self, article):
        return self.item(article.author, AuthorTransformer())


ARTICLES = [
    Article(id=1, title="First", author=Author(id=7, name="Ada")),
    Article(id=2, title="Second", author=Author(id=8, name="Grace")),
    Article(id=3, title="Third", author=Author(id=7, name="Ada")),
]


@pytest.fixture
def registry() -> TransformerRegistry:
    registry = TransformerRegistry()
    registry.register(Article, ArticleTransformer)
    return registry


@pytest.fixture
def app(registry) -> FastAPI:
    app = create_app(registry)

    @app.get("/articles")
    async def list_articles():
        return TransformerResponse(ARTICLES, registry=registry)

    @app.get("/articles/{article_id}")
    async def get_article(article_id: int):
        return TransformerResponse(ARTICLES[article_id - 1], registry=registry)

    @app.get("/authors/{author_id}")
    async def get_author(author_id: int):
        return TransformerResponse(ARTICLES[0].author, registry=registry, status_code=201)

    @app.get("/raw")
    async def raw():
        return TransformerResponse({"plain": True, "items": [1, 2]}, registry=registry)

    @app.get("/context")
    async def context():
        request = registry.current_request()
        return {"bound": request is not None, "path": request.url.path}

    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


class TestTransformerResponse:
    """Tests for responses morphed through the registry."""

    def test_single_item(self, client):
        response = client.get("/articles/2")
        assert response.status_code == 200
        assert response.json() == {"id": 2, "title": "Second"}

    def test_collection(self, client):
        response = client.get("/articles")
        assert response.json() == [
            {"id": 1, "title": "First"},
            {"id": 2, "title": "Second"},
            {"id": 3, "title": "Third"},
        ]

    def test_embeds_from_query_string(self, client):
        response = client.get("/articles", params={"embeds": "author,,"})
        body = response.json()
        assert [a["author"]["name"] for a in body] == ["Ada", "Grace", "Ada"]

    def test_embeds_do_not_leak_between_requests(self, client):
        client.get("/articles/1", params={"embeds": "author"})
        response = client.get("/articles/1")
        assert "author" not in response.json()

    def test_untransformable_content_passes_through(self, client):
        response = client.get("/raw")
        assert response.json() == {"plain": True, "items": [1, 2]}

    def test_unregistered_object_passes_through(self, client):
        response = client.get("/authors/7")
        assert response.status_code == 201
        assert response.json() == {"id": 7, "name": "Ada"}


class TestRequestContextMiddleware:
    """Tests for request binding."""

    def test_request_bound_during_request(self, client, registry):
        response = client.get("/context")
        assert response.json() == {"bound": True, "path": "/context"}
        assert registry.current_request() is None

    def test_defaults_to_singleton_registry(self):
        app = FastAPI()
        app.add_middleware(RequestContextMiddleware)

        @app.get("/")
        async def index():
            return {"bound": get_transformer_registry().current_request() is not None}

        assert TestClient(app).get("/").json() == {"bound": True}


class TestApp:
    """Tests for create_app()."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["transformers"] == 1

    def test_metrics(self, client):
        client.get("/articles")
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "response_transformer_transformations_total" in response.text

    def test_transformer_error_rendered(self, registry, app, client):
        registry.register(Author, lambda c: c.resolve("missing-service"))
        response = client.get("/authors/7")
        assert response.status_code == 500
        assert response.json()["error"]["code"] == "DEPENDENCY_NOT_RESOLVABLE"


class TestMorph:
    def test_morph_uses_registry(self, registry):
        assert morph(ARTICLES[0], registry) == {"id": 1, "title": "First"}

    def test_morph_explicit_request(self, registry):
        result = morph(ARTICLES[0], registry, request={"embeds": "author"})
        assert result["author"] == {"id": 7, "name": "Ada"}

    def test_morph_passes_through(self, registry):
        assert morph({"a": 1}, registry) == {"a": 1}
