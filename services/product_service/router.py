from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import get_current_admin

from .schemas import ProductCreate, ProductResponse, ProductUpdate
from .service import ProductService

public_router = APIRouter(prefix="/products", tags=["Products"])
# THIS PROTECTS EVERY CATALOG WRITE
router = APIRouter(prefix="/admin/products", tags=["Admin"], dependencies=[Depends(get_current_admin)])


@public_router.get("", response_model=list[ProductResponse])
async def list_products(
    category: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db)
):
    return await ProductService.browse(db, category=category, search=search)


@public_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    return await ProductService.get_product_by_id(db, product_id, active_only=True)


@router.get("", response_model=list[ProductResponse])
async def list_all_products(db: AsyncSession = Depends(get_db)):
    return await ProductService.list_products(db)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(product: ProductCreate, db: AsyncSession = Depends(get_db)):
    return await ProductService.create_product(db, product)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: int, payload: ProductUpdate, db: AsyncSession = Depends(get_db)):
    return await ProductService.update_product(db, product_id, payload)


@router.delete("/{product_id}")
async def delete_product(product_id: int, db: AsyncSession = Depends(get_db)):
    await ProductService.delete_product(db, product_id)
    return {"success": True}
