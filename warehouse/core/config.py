import os

# Database Configuration
# Uses default credentials for local Docker Compose setup
DB_URL = os.getenv("DATABASE_URL", "postgres://user:password@db:5432/warehouse_db")

# Application Metadata
PROJECT_NAME = "Warehouse Inventory Tracker"
VERSION = "1.0.0"

# Bearer token verification (tokens are issued by the login service)
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# Inventory rules
# When false, any movement that would take an item below zero is rejected with a Conflict.
ALLOW_NEGATIVE_STOCK = os.getenv("ALLOW_NEGATIVE_STOCK", "false").lower() == "true"

ACTIVITY_LOG_LIMIT = int(os.getenv("ACTIVITY_LOG_LIMIT", 1000)) # Max rows returned by the activity feed
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
