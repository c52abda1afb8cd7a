from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shared.config.database import AsyncSessionLocal, create_tables
from shared.config.settings import ADMIN_EMAIL, ADMIN_PASSWORD
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.order_service import models as order_models
from services.refund_service import models as refund_models
from services.product_service import models as product_models
from services.auth_service import models as auth_models
from services.cart_service import models as cart_models
from services.review_service import models as review_models

from services.order_service.router import router as order_router
from services.admin_service.router import router as admin_router
from services.refund_service.router import router as refund_router
from services.product_service.router import router as product_admin_router, public_router as product_router
from services.auth_service.router import router as auth_router
from services.cart_service.router import router as cart_router
from services.review_service.router import router as review_admin_router, public_router as review_router
from services.auth_service.service import AuthService

app = FastAPI(title="Storefront", version="1.0.0")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, "storefront")

# --- SECURITY SETUP ---
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

@app.on_event("startup")
async def startup_event():
    await create_tables()
    async with AsyncSessionLocal() as db:
        await AuthService.ensure_admin(db, ADMIN_EMAIL, ADMIN_PASSWORD)

@app.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "storefront", "status": "running"}

app.include_router(product_router)
app.include_router(review_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(refund_router)
app.include_router(product_admin_router)
app.include_router(review_admin_router)
