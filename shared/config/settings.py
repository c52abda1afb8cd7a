import os
from dotenv import load_dotenv

load_dotenv()

# Database
DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost") # In Docker, this will be 'postgres'
DB_PORT = os.getenv("POSTGRES_PORT", "5433")
DB_NAME = os.getenv("POSTGRES_DB", "storefront")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Checkout
ORDER_COOLDOWN_SECONDS = int(os.getenv("ORDER_COOLDOWN_SECONDS", "60"))
CHECKOUT_RATE_LIMIT = os.getenv("CHECKOUT_RATE_LIMIT", "30/minute")

# "permissive" lets admins set any status at any time; "strict" enforces the transition table
ORDER_STATUS_POLICY = os.getenv("ORDER_STATUS_POLICY", "permissive").lower()

# Admin bootstrap
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@dinoxe.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# Observability
OTEL_TRACING_ENABLED = os.getenv("OTEL_TRACING_ENABLED", "true").lower() == "true"
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "http://localhost:4317")
