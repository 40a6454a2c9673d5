# tests/test_catalog_service.py
"""Unit tests for catalog reconciliation (import merge, markup, auto-registration)."""

from app.core.enums import MarkupMode
from app.schemas.product import Product
from app.services.catalog_service import (
    apply_bulk_markup, auto_register_from_order, merge_by_identity, merge_imported_products,
)
from factories import make_item


def product(pid, code="", name="Filter", buy=100.0, sell=150.0, brand="Bosch"):
    return Product(id=pid, code=code, brand=brand, name=name, buy_price=buy, sell_price=sell)


class TestMergeImportedProducts:
    def test_matching_code_replaces_fields_keeps_id(self):
        existing = [product("p1", code="A1", name="Old filter", buy=90, sell=120)]
        incoming = [product("tmp", code="A1", name="New filter", buy=95, sell=130, brand="Mann")]
        merged = merge_imported_products(existing, incoming)
        assert len(merged) == 1
        assert merged[0].id == "p1"
        assert merged[0].name == "New filter"
        assert merged[0].brand == "Mann"
        assert (merged[0].buy_price, merged[0].sell_price) == (95, 130)

    def test_blank_code_always_appends(self):
        existing = [product("p1", code="", name="Wiper")]
        merged = merge_imported_products(existing, [product("tmp", code="", name="Wiper")])
        assert len(merged) == 2
        assert merged[0].id == "p1"
        assert merged[1].id not in ("p1", "tmp")

    def test_whitespace_code_treated_as_blank(self):
        existing = [product("p1", code="  ")]
        assert len(merge_imported_products(existing, [product("tmp", code="  ")])) == 2

    def test_unmatched_appended_in_order_existing_order_kept(self):
        existing = [product("p1", code="A1"), product("p2", code="B2"), product("p3", code="C3")]
        incoming = [product("x", code="Z9", name="Belt"), product("y", code="B2", name="Pump"),
                    product("z", code="Y8", name="Spark plug")]
        merged = merge_imported_products(existing, incoming)
        assert [p.code for p in merged] == ["A1", "B2", "C3", "Z9", "Y8"]
        assert merged[1].id == "p2" and merged[1].name == "Pump"

    def test_inputs_not_mutated(self):
        existing = [product("p1", code="A1", name="Old")]
        merge_imported_products(existing, [product("tmp", code="A1", name="New")])
        assert existing[0].name == "Old"


class TestApplyBulkMarkup:
    def test_markup_on_buy(self):
        [updated] = apply_bulk_markup([product("p1", buy=100, sell=150)], 20, MarkupMode.MARKUP_ON_BUY)
        assert updated.sell_price == 120

    def test_change_current(self):
        [updated] = apply_bulk_markup([product("p1", buy=100, sell=150)], 20, MarkupMode.CHANGE_CURRENT)
        assert updated.sell_price == 180

    def test_negative_percent_marks_down(self):
        [updated] = apply_bulk_markup([product("p1", buy=100, sell=150)], -10, MarkupMode.CHANGE_CURRENT)
        assert updated.sell_price == 135

    def test_rounded_to_whole_units(self):
        [updated] = apply_bulk_markup([product("p1", buy=33, sell=0)], 15, MarkupMode.MARKUP_ON_BUY)
        assert updated.sell_price == 38     # 37.95

    def test_only_sell_price_changes(self):
        original = product("p1", code="K-1", name="Kit", buy=100, sell=150, brand="SKF")
        [updated] = apply_bulk_markup([original], 50, MarkupMode.MARKUP_ON_BUY)
        assert updated.model_dump(exclude={"sell_price"}) == original.model_dump(exclude={"sell_price"})
        assert original.sell_price == 150

    def test_merge_by_identity_passes_unselected_through(self):
        catalog = [product("p1", sell=10), product("p2", sell=20), product("p3", sell=30)]
        updated = apply_bulk_markup([catalog[1]], 100, MarkupMode.CHANGE_CURRENT)
        merged = merge_by_identity(catalog, updated)
        assert [p.sell_price for p in merged] == [10, 40, 30]


class TestAutoRegisterFromOrder:
    def test_unknown_name_registered_with_item_fields(self):
        catalog = [product("p1", name="Oil filter")]
        item = make_item("Brake pads", buy=400, sell=650, code="BP-7", item_id="i-1")
        registered = auto_register_from_order(catalog, [item])
        assert len(registered) == 2
        new = registered[1]
        assert (new.id, new.code, new.brand, new.name, new.buy_price, new.sell_price) == \
            ("i-1", "BP-7", "Bosch", "Brake pads", 400, 650)

    def test_known_name_not_duplicated(self):
        catalog = [product("p1", name="Oil filter", sell=150)]
        registered = auto_register_from_order(catalog, [make_item("Oil filter", sell=999)])
        assert registered == catalog
        assert registered[0].sell_price == 150

    def test_matches_by_name_not_code(self):
        catalog = [product("p1", code="X1", name="Oil filter")]
        registered = auto_register_from_order(catalog, [make_item("Air filter", code="X1")])
        assert [p.name for p in registered] == ["Oil filter", "Air filter"]

    def test_same_new_name_twice_registered_once(self):
        items = [make_item("Valve", item_id="a"), make_item("Valve", item_id="b")]
        registered = auto_register_from_order([], items)
        assert [p.id for p in registered] == ["a"]
