# app/schemas/product.py
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from app.config import settings
from app.core.enums import MarkupMode


class Product(BaseModel):
    id: str
    code: str = ""           # article / part number, soft key for import matching
    brand: Optional[str] = ""
    name: str
    buy_price: float = 0.0
    sell_price: float = 0.0


class ProductCreate(BaseModel):
    code: str = ""
    brand: Optional[str] = ""
    name: str = Field(..., min_length=1)
    buy_price: float = Field(0.0, ge=0, allow_inf_nan=False)
    sell_price: float = Field(0.0, ge=0, allow_inf_nan=False)


class ProductUpdate(BaseModel):
    code: Optional[str] = None
    brand: Optional[str] = None
    name: Optional[str] = None
    buy_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    sell_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class ColumnMapping(BaseModel):
    """0-based column index per field, None leaves the field unmapped."""
    code: Optional[int] = Field(default_factory=lambda: settings.IMPORT_CODE_COLUMN, ge=0)
    brand: Optional[int] = Field(default_factory=lambda: settings.IMPORT_BRAND_COLUMN, ge=0)
    name: Optional[int] = Field(default_factory=lambda: settings.IMPORT_NAME_COLUMN, ge=0)
    buy_price: Optional[int] = Field(default_factory=lambda: settings.IMPORT_BUY_PRICE_COLUMN, ge=0)
    sell_price: Optional[int] = Field(default_factory=lambda: settings.IMPORT_SELL_PRICE_COLUMN, ge=0)
    start_row: int = Field(default_factory=lambda: settings.IMPORT_START_ROW, ge=1)   # 1-based, as the operator sees it


class ImportColumn(BaseModel):
    index: int
    label: str


class ImportPreview(BaseModel):
    filename: str
    columns: List[ImportColumn]
    grid: List[List[Any]]


class ImportRequest(BaseModel):
    grid: List[Optional[List[Any]]]
    mapping: ColumnMapping = Field(default_factory=ColumnMapping)


class ImportResult(BaseModel):
    processed: int
    catalog_size: int


class BulkMarkupRequest(BaseModel):
    product_ids: List[str]
    percent: float = Field(..., allow_inf_nan=False)    # negative for a markdown
    mode: MarkupMode = MarkupMode.MARKUP_ON_BUY


class InlineMarkupRequest(BaseModel):
    percent: float = Field(..., allow_inf_nan=False)
