"""
Basic configuration

- CORS origins for development and production
- Storage location and cache lifetimes
- Supports environment variables for deployment overrides
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file early
# Project root is the parent of disfagia_monitor/
project_root = Path(__file__).parent.parent.parent
load_dotenv(dotenv_path=project_root / '.env')

# Default localhost origins for development
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
]

# Get additional CORS origins from environment variable
ADDITIONAL_CORS_ORIGINS = os.getenv("CORS_ORIGINS", "").split(",") if os.getenv("CORS_ORIGINS") else []

# Filter out empty strings from split
ADDITIONAL_CORS_ORIGINS = [origin.strip() for origin in ADDITIONAL_CORS_ORIGINS if origin.strip()]

# Combine default and additional origins
CORS_ORIGINS = DEFAULT_CORS_ORIGINS + ADDITIONAL_CORS_ORIGINS

# Root directory for JSON storage files
DATA_DIR = os.getenv("DATA_DIR", "data")

# Lifetime of cached patient lists
CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", "60"))

# Idle time before an unfinished triage session is dropped
TRIAGE_SESSION_TTL_SECONDS = int(os.getenv("TRIAGE_SESSION_TTL_SECONDS", "1800"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
