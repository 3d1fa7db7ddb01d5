# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Middleware module."""

from .request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
