from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from .models import Cart

class CartRepository:
    @staticmethod
    async def create_cart(db: AsyncSession, cart: Cart):
        db.add(cart)
        await db.commit()
        return cart

    @staticmethod
    async def load(db: AsyncSession, cart_id: str):
        result = await db.execute(select(Cart).where(Cart.cart_id == cart_id))
        return result.scalars().first()

    @staticmethod
    async def save(db: AsyncSession, cart: Cart):
        """Persists the cart and whatever was added to or removed from its items."""
        db.add(cart)
        await db.commit()
        return cart
