import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from warehouse.core.db import init_db, close_db
from warehouse.api.v1.appointments import router as appointments_router
from warehouse.api.v1.inventory import router as inventory_router
from warehouse.api.v1.transactions import router as transactions_router
from warehouse.api.v1.activity_logs import router as activity_logs_router
from warehouse.api.v1.catalog import suppliers_router, categories_router
from warehouse.api.v1.damaged_items import router as damaged_items_router
from warehouse.core.config import PROJECT_NAME, VERSION, LOG_LEVEL
from warehouse.core.exception_handlers import setup_exception_handlers

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
app.include_router(appointments_router, prefix="/api/v1/appointments", tags=["Restock Appointments"])
app.include_router(inventory_router, prefix="/api/v1/inventory", tags=["Inventory"])
app.include_router(transactions_router, prefix="/api/v1/transactions", tags=["Stock Transactions"])
app.include_router(activity_logs_router, prefix="/api/v1/activity-logs", tags=["Activity Logs"])
app.include_router(suppliers_router, prefix="/api/v1/suppliers", tags=["Suppliers"])
app.include_router(categories_router, prefix="/api/v1/categories", tags=["Categories"])
app.include_router(damaged_items_router, prefix="/api/v1/damaged-items", tags=["Damaged Items"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
