import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status

from nextable.core.db import init_db, close_db
from nextable.api.v1.users import router as users_router
from nextable.api.v1.restaurants import router as restaurants_router
from nextable.api.v1.tables import router as tables_router
from nextable.api.v1.menu import router as menu_router
from nextable.api.v1.orders import router as orders_router
from nextable.core.config import LOG_LEVEL, PROJECT_NAME, VERSION
from nextable.core.exception_handlers import setup_exception_handlers

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db() # Connect to DB and generate schemas
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

# Include routers for modular API structure
app.include_router(users_router, prefix="/api/v1/users", tags=["Users"])
app.include_router(restaurants_router, prefix="/api/v1/restaurants", tags=["Restaurants"])
app.include_router(tables_router, prefix="/api/v1/tables", tags=["Tables"])
app.include_router(menu_router, prefix="/api/v1/menu", tags=["Menu"])
app.include_router(orders_router, prefix="/api/v1/orders", tags=["Orders"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
