from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.clock import Clock, get_clock
from shared.config.database import get_db

from .schemas import CartItemCreate, CartItemQuantity, CartResponse
from .service import CartService

router = APIRouter(prefix="/carts", tags=["Cart"])


@router.post("", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
async def create_cart(db: AsyncSession = Depends(get_db), clock: Clock = Depends(get_clock)):
    cart = await CartService.create_cart(db, clock())
    return CartService.summarize(cart)


@router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str, db: AsyncSession = Depends(get_db)):
    cart = await CartService.load(db, cart_id)
    return CartService.summarize(cart)


@router.post("/{cart_id}/items", response_model=CartResponse)
async def add_item(
    cart_id: str,
    item: CartItemCreate,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    cart = await CartService.add_item(db, cart_id, item, clock())
    return CartService.summarize(cart)


@router.patch("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def set_quantity(
    cart_id: str,
    product_id: int,
    payload: CartItemQuantity,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    cart = await CartService.set_quantity(db, cart_id, product_id, payload.quantity, clock())
    return CartService.summarize(cart)


@router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_item(
    cart_id: str,
    product_id: int,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    cart = await CartService.remove_item(db, cart_id, product_id, clock())
    return CartService.summarize(cart)


@router.delete("/{cart_id}/items", response_model=CartResponse)
async def clear_cart(cart_id: str, db: AsyncSession = Depends(get_db), clock: Clock = Depends(get_clock)):
    """Deletes all items in the cart."""
    cart = await CartService.clear(db, cart_id, clock())
    return CartService.summarize(cart)
