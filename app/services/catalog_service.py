# app/services/catalog_service.py
"""
Product catalog reconciliation.

Pure list transforms (merge on import, bulk markup, merge by id,
auto-registration from orders) plus the catalog operations that load,
transform and save the products collection.
"""

from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from app.core.enums import MarkupMode
from app.core.exceptions import ProductNotFoundError
from app.schemas.order import OrderItem
from app.schemas.product import ColumnMapping, Product, ProductCreate, ProductUpdate
from app.services.import_service import extract_products
from app.services.storage_service import ProductRepository
from app.utils.ids import new_id
from app.utils.logger import get_logger
from app.utils.numbers import round_half_up

logger = get_logger(__name__)


def _has_code(code) -> bool:
    return bool(code and code.strip())


def merge_imported_products(existing: List[Product], incoming: Iterable[Product]) -> List[Product]:
    """
    Merge spreadsheet rows into the catalog by article code.

    A row whose non-blank code matches a catalog entry overwrites that
    entry but keeps its id. Everything else, blank codes included, is
    appended with a fresh id. Unmatched entries keep their order.
    """
    merged = list(existing)
    for record in incoming:
        index = None
        if _has_code(record.code):
            index = next((i for i, p in enumerate(merged) if p.code == record.code), None)
        if index is not None:
            merged[index] = record.model_copy(update={"id": merged[index].id})
        else:
            merged.append(record.model_copy(update={"id": new_id()}))
    return merged


def marked_up_price(product: Product, percent: float, mode: MarkupMode) -> float:
    base = product.buy_price if mode == MarkupMode.MARKUP_ON_BUY else product.sell_price
    return round_half_up(base + base * (percent / 100))


def apply_bulk_markup(selected: Iterable[Product], percent: float, mode: MarkupMode) -> List[Product]:
    """New sell prices for the selected products. Only sell_price changes."""
    return [p.model_copy(update={"sell_price": marked_up_price(p, percent, mode)}) for p in selected]


def merge_by_identity(catalog: List[Product], updated: Iterable[Product]) -> List[Product]:
    by_id: Dict[str, Product] = {p.id: p for p in updated}
    return [by_id.get(p.id, p) for p in catalog]


def auto_register_from_order(catalog: List[Product], items: Iterable[OrderItem]) -> List[Product]:
    """
    Append a catalog entry for every line item whose name is not in the
    catalog yet. Matching is by exact name, not by code.
    """
    registered = list(catalog)
    known_names = {p.name for p in registered}
    for item in items:
        if item.name in known_names:
            continue
        registered.append(Product(
            id=item.id,
            code=item.code,
            brand=item.brand,
            name=item.name,
            buy_price=item.buy_price,
            sell_price=item.sell_price,
        ))
        known_names.add(item.name)
        logger.info(f"Auto-registered product '{item.name}' from order item")
    return registered


# ── Catalog operations ───────────────────────────────────────────────────────

def list_products(db: Session) -> List[Product]:
    return ProductRepository(db).load_all()


def get_product(db: Session, product_id: str) -> Product:
    for product in ProductRepository(db).load_all():
        if product.id == product_id:
            return product
    raise ProductNotFoundError(f"Product {product_id} not found")


def create_product(db: Session, body: ProductCreate) -> Product:
    repo = ProductRepository(db)
    product = Product(**body.model_dump(), id=new_id())
    repo.save_all([product] + repo.load_all())   # newest first
    logger.info(f"Product created: {product.code or '-'} {product.name}")
    return product


def update_product(db: Session, product_id: str, body: ProductUpdate) -> Product:
    repo = ProductRepository(db)
    products = repo.load_all()
    for i, product in enumerate(products):
        if product.id == product_id:
            products[i] = product.model_copy(update=body.model_dump(exclude_unset=True, exclude_none=True))
            repo.save_all(products)
            logger.info(f"Product updated: {product_id}")
            return products[i]
    raise ProductNotFoundError(f"Product {product_id} not found")


def delete_product(db: Session, product_id: str) -> None:
    repo = ProductRepository(db)
    products = repo.load_all()
    remaining = [p for p in products if p.id != product_id]
    if len(remaining) == len(products):
        raise ProductNotFoundError(f"Product {product_id} not found")
    repo.save_all(remaining)
    logger.info(f"Product deleted: {product_id}")


def import_products(db: Session, grid, mapping: ColumnMapping) -> int:
    """Extract candidate rows from a spreadsheet grid and merge them into the catalog."""
    repo = ProductRepository(db)
    incoming = extract_products(grid, mapping)
    repo.save_all(merge_imported_products(repo.load_all(), incoming))
    logger.info(f"Imported {len(incoming)} products from spreadsheet")
    return len(incoming)


def bulk_markup(db: Session, product_ids: Iterable[str], percent: float, mode: MarkupMode) -> List[Product]:
    mode = MarkupMode(mode)
    repo = ProductRepository(db)
    catalog = repo.load_all()
    ids = set(product_ids)
    updated = apply_bulk_markup([p for p in catalog if p.id in ids], percent, mode)
    repo.save_all(merge_by_identity(catalog, updated))
    logger.info(f"Bulk price change {percent:+g}% ({mode.value}) on {len(updated)} products")
    return updated


def markup_product(db: Session, product_id: str, percent: float) -> Product:
    """Inline markup: sell price from the product's buy price."""
    product = get_product(db, product_id)
    return bulk_markup(db, [product.id], percent, MarkupMode.MARKUP_ON_BUY)[0]
