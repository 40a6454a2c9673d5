# tests/test_import_service.py
"""Unit tests for spreadsheet row extraction and sheet reading."""

import pandas as pd
import pytest
from unittest.mock import patch
from app.core.exceptions import SpreadsheetReadError
from app.schemas.product import ColumnMapping
from app.services.import_service import extract_products, preview, read_first_sheet

HEADER = ["Code", "Brand", "Name", "Buy", "Sell"]


def mapping(**overrides):
    values = dict(code=0, brand=1, name=2, buy_price=3, sell_price=4, start_row=2)
    values.update(overrides)
    return ColumnMapping(**values)


class TestExtractProducts:
    def test_zero_buy_price_keeps_zero_sell(self):
        [p] = extract_products([HEADER, ["A1", "Bosch", "Filter", "", "0"]], mapping())
        assert (p.buy_price, p.sell_price) == (0, 0)

    def test_unparseable_sell_falls_back_to_buy(self):
        [p] = extract_products([HEADER, ["A2", "Bosch", "Oil", "100", "abc"]], mapping())
        assert (p.buy_price, p.sell_price) == (100, 100)

    def test_fields_trimmed_and_ids_fresh(self):
        rows = [HEADER, ["  A3 ", " Mann ", " Air filter ", "80", "120"], ["A4", "Mann", "Cabin filter", 90, 140]]
        first, second = extract_products(rows, mapping())
        assert (first.code, first.brand, first.name) == ("A3", "Mann", "Air filter")
        assert first.id and second.id and first.id != second.id
        assert second.sell_price == 140

    def test_blank_name_row_dropped(self):
        rows = [HEADER, ["A5", "Bosch", "   ", "10", "20"], ["A6", "Bosch", "Belt", "10", "20"]]
        assert [p.code for p in extract_products(rows, mapping())] == ["A6"]

    def test_empty_and_missing_rows_skipped(self):
        rows = [HEADER, [], None, ["A7", "NGK", "Spark plug", "50", "75"]]
        assert len(extract_products(rows, mapping())) == 1

    def test_start_row_is_one_based(self):
        rows = [["title"], HEADER, ["A8", "Febi", "Mount", "200", "300"]]
        assert [p.code for p in extract_products(rows, mapping(start_row=3))] == ["A8"]
        # the title row has no name column and is dropped, the header row is not
        assert len(extract_products(rows, mapping(start_row=1))) == 2

    def test_unmapped_fields_are_blank(self):
        [p] = extract_products([["Hub bearing", "900"]], mapping(code=None, brand=None, name=0, buy_price=1,
                                                               sell_price=None, start_row=1))
        assert (p.code, p.brand, p.name) == ("", "", "Hub bearing")
        assert (p.buy_price, p.sell_price) == (900, 900)

    def test_sparse_row_shorter_than_mapping(self):
        [p] = extract_products([HEADER, ["A9", "Bosch", "Fuse"]], mapping())
        assert (p.buy_price, p.sell_price) == (0, 0)

    def test_price_text_stripped(self):
        [p] = extract_products([HEADER, ["B1", "", "Tube", "1 200 грн", "1500.50 UAH"]], mapping())
        assert (p.buy_price, p.sell_price) == (1200, 1500.5)

    def test_numeric_code_from_excel(self):
        [p] = extract_products([HEADER, [1234.0, "VAG", "Gasket", 10, 20]], mapping())
        assert p.code == "1234"

    def test_default_mapping(self):
        default = ColumnMapping()
        assert (default.code, default.brand, default.name, default.buy_price, default.sell_price) == (0, 1, 2, 3, 4)
        assert default.start_row == 2


class TestReadFirstSheet:
    def test_csv_grid(self):
        content = "Code,Brand,Name,Buy,Sell\nA1,Bosch,Filter,,0\nA2,Bosch,Oil,100,abc\n".encode("utf-8")
        grid = read_first_sheet(content, "prices.csv")
        assert grid[0] == HEADER
        assert grid[1] == ["A1", "Bosch", "Filter", None, "0"]
        products = extract_products(grid, mapping())
        assert [(p.name, p.buy_price, p.sell_price) for p in products] == [("Filter", 0, 0), ("Oil", 100, 100)]

    def test_trailing_blank_cells_trimmed(self):
        grid = read_first_sheet(b"A1,Bosch,Filter,,\n", "prices.csv")
        assert grid == [["A1", "Bosch", "Filter"]]

    def test_unreadable_file(self):
        with pytest.raises(SpreadsheetReadError):
            read_first_sheet(b"definitely not a workbook", "prices.xlsx")

    def test_preview_labels_columns(self):
        result = preview(b"a,b,c\n1,2,3\n", "list.csv")
        assert [c.label for c in result.columns] == ["A", "B", "C"]
        assert result.grid[1] == ["1", "2", "3"]

    def test_legacy_xls_read_with_xlrd(self):
        sheet = pd.DataFrame([HEADER, ["A1", "Bosch", "Filter", 100.0, None]], dtype=object)
        with patch("app.services.import_service.pd.read_excel", return_value=sheet) as read_excel:
            result = preview(b"\xd0\xcf\x11\xe0", "old_prices.XLS")
        assert read_excel.call_args.kwargs["engine"] == "xlrd"
        assert result.grid[1] == ["A1", "Bosch", "Filter", 100.0]
        assert [p.sell_price for p in extract_products(result.grid, mapping())] == [100]

    def test_xlsx_uses_default_engine(self):
        sheet = pd.DataFrame([HEADER], dtype=object)
        with patch("app.services.import_service.pd.read_excel", return_value=sheet) as read_excel:
            read_first_sheet(b"PK", "prices.xlsx")
        assert "engine" not in read_excel.call_args.kwargs
