# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Pytest configuration and shared fixtures."""

import pytest

from response_transformer.config import clear_settings_cache
from response_transformer.container import Container
from response_transformer.transformer import TransformerRegistry, reset_transformer_registry


@pytest.fixture(autouse=True)
def reset_state():
    """Reset settings cache and the registry singleton before each test."""
    clear_settings_cache()
    reset_transformer_registry()
    yield
    clear_settings_cache()
    reset_transformer_registry()


@pytest.fixture
def container() -> Container:
    return Container()


@pytest.fixture
def registry(container) -> TransformerRegistry:
    """Fresh registry with default embeds configuration."""
    return TransformerRegistry(container=container)
