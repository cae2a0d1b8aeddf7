"""Unit tests for structural order validation."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.service.order_validator import RequestedItem, normalize_items


class TestNormalizeItems:

    def test_normalizes_camel_and_snake_case(self):
        items = normalize_items([
            {"productId": 1, "quantity": 2, "options": {"size": "large"}},
            {"product_id": "3", "quantity": 1},
        ])
        assert items == [
            RequestedItem(product_id=1, quantity=2, options={"size": "large"}),
            RequestedItem(product_id=3, quantity=1, options=None),
        ]

    @pytest.mark.parametrize("raw", [[], None, "items", {"productId": 1, "quantity": 1}])
    def test_not_a_non_empty_list(self, raw):
        with pytest.raises(ValidationError, match="non-empty list"):
            normalize_items(raw)

    def test_item_must_be_object(self):
        with pytest.raises(ValidationError, match="Item #1 must be an object"):
            normalize_items([42])

    def test_missing_product_reference(self):
        with pytest.raises(ValidationError, match="Item #2 is missing a product reference"):
            normalize_items([{"productId": 1, "quantity": 1}, {"quantity": 1}])

    @pytest.mark.parametrize(
        "ref",
        [0, -4, "abc", 1.5, True, "\u00b2", " 12x", 2**63, 10**20, "100000000000000000000"],
    )
    def test_invalid_product_reference(self, ref):
        with pytest.raises(ValidationError, match="invalid product reference"):
            normalize_items([{"productId": ref, "quantity": 1}])

    @pytest.mark.parametrize("qty", [0, -1, 1.5, "2", None, True, 2**63])
    def test_quantity_must_be_positive_integer(self, qty):
        with pytest.raises(ValidationError, match="quantity must be a positive integer"):
            normalize_items([{"productId": 1, "quantity": qty}])

    def test_options_must_be_mapping(self):
        with pytest.raises(ValidationError, match="options must be a mapping"):
            normalize_items([{"productId": 1, "quantity": 1, "options": ["large"]}])

    def test_option_values_must_be_text(self):
        with pytest.raises(ValidationError, match="'size' must map a text title"):
            normalize_items([{"productId": 1, "quantity": 1, "options": {"size": 3}}])

    def test_does_not_mutate_input(self):
        raw = [{"productId": 1, "quantity": 2, "options": {"size": "large"}}]
        items = normalize_items(raw)
        items[0].options["size"] = "small"
        assert raw[0]["options"]["size"] == "large"
