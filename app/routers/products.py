# app/routers/products.py
"""Product catalog: CRUD, spreadsheet import, bulk price changes."""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from app.database import get_db
from app.routers._confirm import require_confirmation
from app.schemas.product import (
    BulkMarkupRequest, ImportPreview, ImportRequest, ImportResult,
    InlineMarkupRequest, Product, ProductCreate, ProductUpdate,
)
from app.services import catalog_service, import_service

router = APIRouter()


@router.get("/products", response_model=list[Product])
def list_products(db: Session = Depends(get_db)):
    return catalog_service.list_products(db)


@router.post("/products", response_model=Product, status_code=201)
def create_product(body: ProductCreate, db: Session = Depends(get_db)):
    return catalog_service.create_product(db, body)


@router.patch("/products/{product_id}", response_model=Product)
def update_product(product_id: str, body: ProductUpdate, db: Session = Depends(get_db)):
    return catalog_service.update_product(db, product_id, body)


@router.delete("/products/{product_id}", dependencies=[Depends(require_confirmation)])
def delete_product(product_id: str, db: Session = Depends(get_db)):
    catalog_service.delete_product(db, product_id)
    return {"status": "deleted", "product_id": product_id}


@router.post("/products/import/preview", response_model=ImportPreview, summary="Read the first sheet of a price list")
async def preview_import(file: UploadFile = File(...)):
    """Returns the raw grid and column labels so the operator can map columns."""
    content = await file.read()
    return import_service.preview(content, file.filename or "upload.xlsx")


@router.post("/products/import", response_model=ImportResult, summary="Merge a mapped grid into the catalog")
def import_products(body: ImportRequest, db: Session = Depends(get_db)):
    processed = catalog_service.import_products(db, body.grid, body.mapping)
    return ImportResult(processed=processed, catalog_size=len(catalog_service.list_products(db)))


@router.post("/products/markup", response_model=list[Product], summary="Bulk price change on selected products")
def bulk_markup(body: BulkMarkupRequest, db: Session = Depends(get_db)):
    return catalog_service.bulk_markup(db, body.product_ids, body.percent, body.mode)


@router.post("/products/{product_id}/markup", response_model=Product, summary="Sell price = buy price + percent")
def markup_product(product_id: str, body: InlineMarkupRequest, db: Session = Depends(get_db)):
    return catalog_service.markup_product(db, product_id, body.percent)
