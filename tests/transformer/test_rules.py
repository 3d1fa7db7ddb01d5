# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for transformation rules and type key derivation."""

from dataclasses import dataclass

import pytest

from response_transformer.container import Container
from response_transformer.transformer import (
    ClassRule,
    FactoryRule,
    as_rule,
    class_key,
    is_homogeneous_sequence,
    transform_key,
)


@dataclass
class Invoice:
    number: str


class Receipt:
    __transform_key__ = "billing.receipt"


class InvoiceTransformer:
    def __call__(self, invoice):
        return {"number": invoice.number}


class TestAsRule:
    """Tests for wrapping raw registrations."""

    def test_class_becomes_class_rule(self):
        rule = as_rule(InvoiceTransformer)
        assert rule == ClassRule(InvoiceTransformer)
        assert rule.kind == "class"

    def test_function_becomes_factory_rule(self):
        def factory(container):
            return InvoiceTransformer()

        rule = as_rule(factory)
        assert rule == FactoryRule(factory)
        assert rule.kind == "factory"

    def test_existing_rule_unchanged(self):
        rule = ClassRule(InvoiceTransformer)
        assert as_rule(rule) is rule

    def test_none_and_non_callables_unchanged(self):
        assert as_rule(None) is None
        assert as_rule("InvoiceTransformer") == "InvoiceTransformer"

    def test_callable_instance_becomes_factory_rule(self):
        instance = InvoiceTransformer()
        assert isinstance(as_rule(instance), FactoryRule)


class TestResolve:
    """Tests for resolve(container)."""

    def test_class_rule_builds_new_instance_each_time(self):
        rule = ClassRule(InvoiceTransformer)
        first = rule.resolve(Container())
        second = rule.resolve(Container())
        assert isinstance(first, InvoiceTransformer)
        assert first is not second

    def test_factory_rule_returns_factory_result(self):
        container = Container().instance("prefix", "INV-")
        rule = FactoryRule(lambda c: (lambda invoice: c.resolve("prefix") + invoice.number))
        transformer = rule.resolve(container)
        assert transformer(Invoice(number="42")) == "INV-42"

    def test_factory_failure_propagates(self):
        def broken(container):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            FactoryRule(broken).resolve(Container())


class TestTransformKey:
    """Tests for type key derivation."""

    def test_object_uses_class_name(self):
        assert transform_key(Invoice(number="1")) == "Invoice"

    def test_explicit_transform_key(self):
        assert transform_key(Receipt()) == "billing.receipt"
        assert class_key(Receipt) == "billing.receipt"

    def test_empty_transform_key_falls_back_to_name(self):
        class Blank:
            __transform_key__ = ""

        assert class_key(Blank) == "Blank"

    def test_collection_uses_first_element(self):
        assert transform_key([Invoice(number="1"), Receipt()]) == "Invoice"
        assert transform_key((Receipt(),)) == "billing.receipt"

    def test_empty_collection_has_no_key(self):
        assert transform_key([]) is None
        assert transform_key(()) is None

    @pytest.mark.parametrize("value", ["draft", 3, 2.5, True, None, b"raw"])
    def test_scalars_are_literal_keys(self, value):
        assert transform_key(value) == value

    def test_mappings_use_type_name(self):
        assert transform_key({"number": "1"}) == "dict"


class TestIsHomogeneousSequence:
    @pytest.mark.parametrize("value", [[], [1], (), (1, 2)])
    def test_lists_and_tuples(self, value):
        assert is_homogeneous_sequence(value) is True

    @pytest.mark.parametrize("value", ["abc", b"abc", {1, 2}, {"a": 1}, range(3), None])
    def test_other_values(self, value):
        assert is_homogeneous_sequence(value) is False
