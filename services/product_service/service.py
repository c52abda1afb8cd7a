from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import NotFound

from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate

logger = structlog.get_logger(__name__)

ALL_CATEGORIES = "All"


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate):
        product = Product(**data.model_dump())
        product = await ProductRepository.create_product(db, product)
        logger.info("product_created", product_id=product.id, name=product.name)
        return product

    @staticmethod
    async def list_products(db: AsyncSession):
        return await ProductRepository.get_all_products(db)

    @staticmethod
    async def browse(db: AsyncSession, category: Optional[str] = None, search: Optional[str] = None):
        """Storefront listing: active products, newest first."""
        if category == ALL_CATEGORIES:
            category = None
        return await ProductRepository.get_all_products(
            db, active_only=True, category=category, search=search
        )

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int, active_only: bool = False):
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product or (active_only and not product.is_active):
            raise NotFound("Product")
        return product

    @staticmethod
    async def update_product(db: AsyncSession, product_id: int, data: ProductUpdate):
        product = await ProductService.get_product_by_id(db, product_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(product, key, value)
        return await ProductRepository.update_product(db, product)

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int):
        product = await ProductService.get_product_by_id(db, product_id)
        await ProductRepository.delete_product(db, product)
        logger.info("product_deleted", product_id=product_id)
