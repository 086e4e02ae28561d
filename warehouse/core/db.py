from contextlib import asynccontextmanager
from tortoise import Tortoise
from tortoise.exceptions import DBConnectionError, OperationalError, TransactionManagementError
from tortoise.transactions import in_transaction
from warehouse.core.config import DB_URL
from warehouse.core.errors import PersistenceFailure
import logging
from logging import INFO

# Set logging level for Tortoise ORM
logging.getLogger('tortoise').setLevel(INFO)
log = logging.getLogger(__name__)

# Define all models modules for the ORM
MODELS_MODULES = [
    "warehouse.models.inventory",
    "warehouse.models.appointment",
    "warehouse.models.ledger",
    "warehouse.models.activity_log",
    "warehouse.models.damaged_item",
]

async def init_db(db_url: str = DB_URL, generate_schemas: bool = True):
    """Initializes the Tortoise ORM connection pool and optionally generates schemas."""
    try:
        await Tortoise.init(
            db_url=db_url,
            modules={"models": MODELS_MODULES},
        )
        if generate_schemas:
            # Create missing tables; existing ones are left untouched
            await Tortoise.generate_schemas(safe=True)
        log.info("Database connection established and schemas generated.")
    except Exception as e:
        log.critical(f"Could not connect to database. Error: {e}")
        # Re-raise to prevent the application from starting without a database
        raise

async def close_db():
    """Closes all database connections."""
    await Tortoise.close_connections()
    log.info("Database connections closed.")


@asynccontextmanager
async def unit_of_work():
    """
    Opens one database transaction for a group of writes that must commit or roll back together.
    Anything raised inside the block rolls the transaction back; driver/ORM failures are
    re-raised as PersistenceFailure so callers see a single transient error kind.
    """
    try:
        async with in_transaction() as conn:
            yield conn
    except (OperationalError, DBConnectionError, TransactionManagementError) as e:
        log.error(f"Unit of work rolled back after persistence error: {e}")
        raise PersistenceFailure("The inventory store rejected the operation. No changes were applied.") from e
