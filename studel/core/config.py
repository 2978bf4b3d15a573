import os

# Database Configuration
# Uses default credentials for local Docker Compose setup
DB_URL = os.getenv("DATABASE_URL", "postgres://user:password@db:5432/studel_db")
GENERATE_SCHEMAS = os.getenv("GENERATE_SCHEMAS", "true").lower() in ("1", "true", "yes")

# Application Metadata
PROJECT_NAME = "Studel Campus Ordering Service"
VERSION = "1.0.0"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Calendar day boundaries for vendor revenue and runner earnings are taken in this zone
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")

# Bearer tokens are issued by the external identity provider and share this secret
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-studel-dev-secret")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 12))
