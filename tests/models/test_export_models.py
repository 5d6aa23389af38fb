"""Tests for src/models/export.py"""

from src.models import MetaBag, RawItem, TaxonomyTerm


class TestMetaBag:
    def test_last_value_wins(self):
        bag = MetaBag([("_price", "12.50"), ("_sku", "A"), ("_price", "9.90")])
        assert bag["_price"] == "9.90"
        assert len(bag) == 2

    def test_merge_replaces(self):
        bag = MetaBag()
        bag.merge("_sku", "A")
        bag.merge("_sku", "B")
        assert dict(bag) == {"_sku": "B"}

    def test_empty_key_ignored(self):
        bag = MetaBag([("", "orphan")])
        assert len(bag) == 0

    def test_resolve_priority_order(self):
        bag = MetaBag([("_regular_price", "20"), ("_price", "15")])
        assert bag.resolve("_price", "_regular_price") == "15"

    def test_resolve_skips_blank_values(self):
        bag = MetaBag([("_price", "  "), ("_regular_price", " 20 ")])
        assert bag.resolve("_price", "_regular_price") == "20"

    def test_resolve_missing(self):
        assert MetaBag().resolve("_sku") == ""


class TestRawItem:
    def make(self):
        return RawItem(
            post_type="product",
            post_id="10",
            terms=(
                TaxonomyTerm("product_type", "variable"),
                TaxonomyTerm("pa_taille", "S"),
                TaxonomyTerm("product_cat", "T-shirts"),
                TaxonomyTerm("pa_taille", "M"),
            ),
        )

    def test_terms_in_keeps_order(self):
        assert self.make().terms_in("pa_taille") == ["S", "M"]

    def test_terms_in_unknown_domain(self):
        assert self.make().terms_in("pa_color") == []

    def test_has_term(self):
        item = self.make()
        assert item.has_term("product_type", "variable")
        assert not item.has_term("product_cat", "variable")

    def test_default_meta_is_empty(self):
        assert len(RawItem(post_type="post", post_id="1").meta) == 0
