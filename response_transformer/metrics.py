# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Prometheus metrics for response transformation."""

from prometheus_client import Counter, Gauge

from .config import get_settings

settings = get_settings()
prefix = settings.metrics_prefix


TRANSFORMATIONS_TOTAL = Counter(
    f"{prefix}_transformations_total",
    "Total response transformations",
    ["type_key", "shape", "result"],  # shape: "item", "collection"; result: "transformed", "error"
)

TRANSFORMERS_REGISTERED = Gauge(
    f"{prefix}_transformers_registered",
    "Number of type keys with a registered transformer",
)


def record_transformation(type_key: object, shape: str, result: str) -> None:
    """Count one transform call, if metrics are enabled."""
    if not get_settings().enable_metrics:
        return
    TRANSFORMATIONS_TOTAL.labels(
        type_key=str(type_key), shape=shape, result=result
    ).inc()


def record_registered(count: int) -> None:
    """Publish the number of registered type keys."""
    if not get_settings().enable_metrics:
        return
    TRANSFORMERS_REGISTERED.set(count)
