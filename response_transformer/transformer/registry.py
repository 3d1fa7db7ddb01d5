# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Transformer registry — maps type keys to transformation rules.

Resolution for a response value:
1. Derive the type key (first element for lists/tuples)
2. Look up the rule (None when the key is not registered)
3. Resolve the rule into a transformer (class or factory)
4. Push the embeds requested by the current request into the manager
5. Wrap as an Item or a Collection and serialize
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import structlog

from ..config import Settings, get_settings
from ..container import Container
from ..errors import InvalidTransformerError, InvalidTypeKeyError
from ..logging_config import transform_context
from ..metrics import record_registered, record_transformation
from ..serializer import Manager
from .keys import class_key, is_homogeneous_sequence, transform_key
from .rules import TransformerRule, as_rule

logger = structlog.get_logger(__name__)


class TransformerRegistry:
    """Registry of transformers keyed by type, with embeds support."""

    def __init__(
        self,
        manager: Manager | None = None,
        container: Container | None = None,
        embeds_key: str = "embeds",
        embeds_separator: str = ",",
    ) -> None:
        self._manager = manager or Manager()
        self._container = container or Container()
        self._embeds_key = embeds_key
        self._embeds_separator = embeds_separator
        self._transformers: dict[Any, Any] = {}
        self._request: ContextVar[Any] = ContextVar(
            f"transformer_request_{id(self)}", default=None
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        container: Container | None = None,
    ) -> "TransformerRegistry":
        settings = settings or get_settings()
        return cls(
            manager=Manager(recursion_limit=settings.recursion_limit),
            container=container,
            embeds_key=settings.embeds_key,
            embeds_separator=settings.embeds_separator,
        )

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def manager(self) -> Manager:
        return self._manager

    @property
    def container(self) -> Container:
        return self._container

    @property
    def embeds_key(self) -> str:
        return self._embeds_key

    @property
    def embeds_separator(self) -> str:
        return self._embeds_separator

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, type_key: Any, rule: Any) -> "TransformerRegistry":
        """Register (or replace) the rule for a type key.

        Args:
            type_key: A hashable key (string or scalar sentinel), or a class
                (its transform key is used).
            rule: A transformer class, a factory taking the Container, or a
                TransformerRule. Not validated until transform time.

        Raises:
            InvalidTypeKeyError: if `type_key` is not hashable.
        """
        key = class_key(type_key) if isinstance(type_key, type) else type_key
        try:
            hash(key)
        except TypeError:
            raise InvalidTypeKeyError(key) from None
        self._transformers[key] = as_rule(rule)
        logger.debug("Transformer registered", type_key=str(key))
        record_registered(len(self._transformers))
        return self

    def list_transformers(self) -> Mapping[Any, Any]:
        """Return a read-only snapshot of registered rules (for introspection/testing)."""
        return MappingProxyType(dict(self._transformers))

    def get_rule(self, value: Any) -> Any:
        """Return the rule registered for `value`'s type key, or None."""
        if is_homogeneous_sequence(value) and not value:
            # Empty collections never resolve a rule, not even a None sentinel
            return None
        try:
            return self._transformers.get(transform_key(value))
        except TypeError:
            # Unhashable key
            return None

    def is_transformable(self, value: Any) -> bool:
        return self.get_rule(value) is not None

    def resolve_rule(self, rule: Any) -> Any:
        """Turn a stored rule into a transformer instance (None stays None)."""
        if rule is None:
            return None
        if isinstance(rule, TransformerRule):
            return rule.resolve(self._container)
        raise InvalidTransformerError(rule)

    # -------------------------------------------------------------------------
    # Request context
    # -------------------------------------------------------------------------

    def bind_request_context(self, request: Any) -> Token:
        """Bind the request used to read embeds, for the current context only."""
        return self._request.set(request)

    def release_request_context(self, token: Token) -> None:
        self._request.reset(token)

    def current_request(self) -> Any:
        return self._request.get()

    def requested_scopes(self, request: Any) -> list[str]:
        """Split the embeds query parameter of `request`, dropping empty tokens."""
        params = getattr(request, "query_params", request)
        raw = params.get(self._embeds_key)
        if not raw:
            return []
        return [scope for scope in str(raw).split(self._embeds_separator) if scope]

    # -------------------------------------------------------------------------
    # Transformation
    # -------------------------------------------------------------------------

    def transform(self, value: Any, request: Any = None) -> Any:
        """Transform a response value into plain dicts/lists.

        Lists and tuples are rendered as collections, anything else as a
        single item. `request` defaults to the bound request context.
        """
        if is_homogeneous_sequence(value):
            return self.transform_many(value, request)
        return self.transform_one(value, request)

    def transform_one(self, value: Any, request: Any = None) -> Any:
        return self._dispatch(value, "item", request)

    def transform_many(self, values: Iterable[Any], request: Any = None) -> Any:
        return self._dispatch(list(values), "collection", request)

    def _dispatch(self, data: Any, shape: str, request: Any) -> Any:
        key = transform_key(data)
        rule = self.get_rule(data)

        with transform_context(key, shape):
            try:
                transformer = self.resolve_rule(rule)
                self._push_requested_scopes(request)

                if shape == "collection":
                    resource = self._manager.create_collection(data, transformer)
                else:
                    resource = self._manager.create_item(data, transformer)

                result = self._manager.serialize(resource)
            except Exception as e:
                logger.warning("Transformation failed", error=str(e))
                record_transformation(self._metric_label(key), shape, "error")
                raise

            logger.debug(
                "Response transformed",
                scopes=list(self._manager.requested_scopes),
            )
        record_transformation(self._metric_label(key), shape, "transformed")
        return result

    def _push_requested_scopes(self, request: Any) -> None:
        if request is None:
            request = self.current_request()
        if request is None:
            # Back to the default so a previous call's embeds are not reused
            self._manager.set_requested_scopes(())
            return
        self._manager.set_requested_scopes(self.requested_scopes(request))

    def _metric_label(self, key: Any) -> str:
        # Registered keys form a bounded set; anything else shares one label
        try:
            registered = key in self._transformers
        except TypeError:
            registered = False
        return str(key) if registered else "unregistered"


# =============================================================================
# Singleton
# =============================================================================

_registry: TransformerRegistry | None = None


def get_transformer_registry() -> TransformerRegistry:
    """Get the process-wide registry, built from settings on first use."""
    global _registry
    if _registry is None:
        _registry = TransformerRegistry.from_settings()
    return _registry


def reset_transformer_registry() -> None:
    """Drop the process-wide registry (useful for testing)."""
    global _registry
    _registry = None
