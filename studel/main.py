import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from studel.core.db import init_db, close_db
from studel.api.v1.admin import router as admin_router
from studel.api.v1.catalog import router as catalog_router
from studel.api.v1.customer import router as customer_router
from studel.api.v1.orders import router as orders_router
from studel.api.v1.runner import router as runner_router
from studel.api.v1.users import router as users_router
from studel.api.v1.vendor import router as vendor_router
from studel.core.config import LOG_LEVEL, PROJECT_NAME, VERSION
from studel.core.exception_handlers import setup_exception_handlers

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db()  # Connect to DB and generate schemas
    yield
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)

# One router per role; each only exposes the transitions that role may invoke
app.include_router(catalog_router, prefix="/api/v1/catalog", tags=["Catalog"])
app.include_router(users_router, prefix="/api/v1/users", tags=["Users"])
app.include_router(orders_router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(customer_router, prefix="/api/v1/customer", tags=["Customer"])
app.include_router(runner_router, prefix="/api/v1/runner", tags=["Runner"])
app.include_router(vendor_router, prefix="/api/v1/vendor", tags=["Vendor"])
app.include_router(admin_router, prefix="/api/v1/admin", tags=["Admin"])


setup_exception_handlers(app)


@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
