"""
Server-side cart. A cart is loaded, changed in memory and saved back
explicitly; nothing is held between requests.
"""
import uuid
from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.order_service.validators import MAX_ITEM_QUANTITY
from shared.errors import NotFound, ValidationFailed
from shared.observability import store_active_carts

from .models import Cart, CartItem
from .repository import CartRepository
from .schemas import CartItemCreate, CartItemResponse, CartResponse

logger = structlog.get_logger(__name__)


def _too_many(product_id: int) -> ValidationFailed:
    return ValidationFailed({"quantity": f"At most {MAX_ITEM_QUANTITY} of product {product_id} per order"})


class CartService:

    @staticmethod
    def summarize(cart: Cart) -> CartResponse:
        return CartResponse(
            cart_id=cart.cart_id,
            items=[CartItemResponse.model_validate(item) for item in cart.items],
            total=round(sum(item.product_price * item.quantity for item in cart.items), 2),
            count=sum(item.quantity for item in cart.items),
        )

    @staticmethod
    async def create_cart(db: AsyncSession, now: datetime) -> Cart:
        cart = Cart(cart_id=str(uuid.uuid4()), created_at=now, updated_at=now, items=[])
        return await CartRepository.create_cart(db, cart)

    @staticmethod
    async def load(db: AsyncSession, cart_id: str) -> Cart:
        cart = await CartRepository.load(db, cart_id)
        if not cart:
            raise NotFound("Cart")
        return cart

    @staticmethod
    async def save(db: AsyncSession, cart: Cart, was_empty: bool, now: datetime) -> Cart:
        cart.updated_at = now
        cart = await CartRepository.save(db, cart)
        if was_empty and cart.items:
            store_active_carts.inc()
        elif not was_empty and not cart.items:
            store_active_carts.dec()
        return cart

    @staticmethod
    def _find(cart: Cart, product_id: int):
        return next((item for item in cart.items if item.product_id == product_id), None)

    @staticmethod
    async def add_item(db: AsyncSession, cart_id: str, data: CartItemCreate, now: datetime) -> Cart:
        cart = await CartService.load(db, cart_id)
        was_empty = not cart.items

        existing = CartService._find(cart, data.product_id)
        quantity = data.quantity + (existing.quantity if existing else 0)
        if quantity > MAX_ITEM_QUANTITY:
            raise _too_many(data.product_id)

        if existing:
            existing.quantity = quantity
        else:
            cart.items.append(CartItem(**data.model_dump()))

        logger.info("cart_item_added", cart_id=cart_id, product_id=data.product_id, quantity=quantity)
        return await CartService.save(db, cart, was_empty, now)

    @staticmethod
    async def set_quantity(db: AsyncSession, cart_id: str, product_id: int, quantity: int, now: datetime) -> Cart:
        """Zero or less removes the line."""
        if quantity <= 0:
            return await CartService.remove_item(db, cart_id, product_id, now)
        if quantity > MAX_ITEM_QUANTITY:
            raise _too_many(product_id)

        cart = await CartService.load(db, cart_id)
        item = CartService._find(cart, product_id)
        if not item:
            raise NotFound("Cart item")
        item.quantity = quantity
        return await CartService.save(db, cart, False, now)

    @staticmethod
    async def remove_item(db: AsyncSession, cart_id: str, product_id: int, now: datetime) -> Cart:
        cart = await CartService.load(db, cart_id)
        was_empty = not cart.items
        item = CartService._find(cart, product_id)
        if item:
            cart.items.remove(item)
        return await CartService.save(db, cart, was_empty, now)

    @staticmethod
    async def clear(db: AsyncSession, cart_id: str, now: datetime) -> Cart:
        cart = await CartService.load(db, cart_id)
        was_empty = not cart.items
        cart.items.clear()
        logger.info("cart_cleared", cart_id=cart_id)
        return await CartService.save(db, cart, was_empty, now)
