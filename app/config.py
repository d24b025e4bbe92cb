# /app/config.py

import os

# Runtime settings come straight from the environment (Railway/Kubernetes
# inject them). The second argument is the default for local development.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./test.db")

APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- Database collaborator tuning ---
DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", "5"))
DB_MAX_CONNECTION_ATTEMPTS = int(os.getenv("DB_MAX_CONNECTION_ATTEMPTS", "3"))
DATA_CACHE_TTL_SECONDS = int(os.getenv("DATA_CACHE_TTL_SECONDS", "600"))

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
