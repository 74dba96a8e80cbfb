import os
from decimal import Decimal
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Storage: an empty DATABASE_URL keeps everything in memory
DATABASE_URL = os.getenv("DATABASE_URL", "")

# Stub token signing
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 1440))

# Workflow tuning
TAX_RATE = Decimal(os.getenv("TAX_RATE", "0.10"))
DEFAULT_RESERVATION_MINUTES = int(os.getenv("DEFAULT_RESERVATION_MINUTES", 120))

SEED_ON_STARTUP = os.getenv("SEED_ON_STARTUP", "true").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
