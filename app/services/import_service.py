# app/services/import_service.py
"""
Spreadsheet import: raw file → first-sheet grid → candidate products.

read_first_sheet() turns an uploaded .xlsx/.xls/.csv into a row-major list
of cell values via pandas. extract_products() applies the operator's
column mapping to that grid. Merging into the catalog happens in
catalog_service.
"""

import io
from typing import Any, List, Optional, Sequence

import pandas as pd

from app.core.exceptions import SpreadsheetReadError
from app.schemas.product import ColumnMapping, ImportColumn, ImportPreview, Product
from app.utils.ids import new_id
from app.utils.logger import get_logger
from app.utils.numbers import column_label, parse_number

logger = get_logger(__name__)

CSV_EXTENSIONS = (".csv", ".txt")
LEGACY_EXCEL_EXTENSIONS = (".xls",)


def _cell(row: Sequence[Any], index: Optional[int]) -> Any:
    if index is None or index >= len(row):
        return None
    return row[index]


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))     # Excel stores article numbers like 1234 as 1234.0
    return str(value).strip()


def extract_products(grid: Sequence[Optional[Sequence[Any]]], mapping: ColumnMapping) -> List[Product]:
    """
    Candidate catalog records from a grid, starting at mapping.start_row (1-based).

    Empty rows and rows with a blank name are skipped. A missing sell price
    falls back to the buy price so incomplete price lists do not create
    free products.
    """
    products = []
    for row in grid[max(0, mapping.start_row - 1):]:
        if not row:
            continue

        buy_price = parse_number(_cell(row, mapping.buy_price))
        sell_price = parse_number(_cell(row, mapping.sell_price))
        if sell_price == 0 and buy_price > 0:
            sell_price = buy_price

        name = _cell_text(_cell(row, mapping.name))
        if not name:
            continue

        products.append(Product(
            id=new_id(),
            code=_cell_text(_cell(row, mapping.code)),
            brand=_cell_text(_cell(row, mapping.brand)),
            name=name,
            buy_price=buy_price,
            sell_price=sell_price,
        ))
    return products


def _trim_row(values: List[Any]) -> List[Any]:
    while values and values[-1] is None:
        values.pop()
    return values


def read_first_sheet(content: bytes, filename: str) -> List[List[Any]]:
    """Row-major cell values of the first sheet. Blank cells become None."""
    buffer = io.BytesIO(content)
    try:
        if filename.lower().endswith(CSV_EXTENSIONS):
            frame = pd.read_csv(buffer, header=None, dtype=object, keep_default_na=False, na_values=[""])
        elif filename.lower().endswith(LEGACY_EXCEL_EXTENSIONS):
            frame = pd.read_excel(buffer, sheet_name=0, header=None, dtype=object, engine="xlrd")
        else:
            frame = pd.read_excel(buffer, sheet_name=0, header=None, dtype=object)
    except Exception as e:
        logger.warning(f"Unreadable spreadsheet {filename}: {e}")
        raise SpreadsheetReadError(f"Cannot read spreadsheet '{filename}'", {"error": str(e)}) from e
    frame = frame.astype(object).where(pd.notna(frame), None)
    grid = [_trim_row(list(row)) for row in frame.itertuples(index=False, name=None)]
    logger.info(f"Read {len(grid)} rows from {filename}")
    return grid


def preview(content: bytes, filename: str) -> ImportPreview:
    grid = read_first_sheet(content, filename)
    width = max((len(row) for row in grid), default=0)
    return ImportPreview(
        filename=filename,
        columns=[ImportColumn(index=i, label=column_label(i)) for i in range(width)],
        grid=grid,
    )
