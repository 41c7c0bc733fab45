import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Optional: without it the store runs in degraded (no-op) mode
DATABASE_URL = os.getenv("DATABASE_URL")

DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "20"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", "12"))

# External identity that becomes admin on first sign-in
OWNER_OPEN_ID = os.getenv("OWNER_OPEN_ID")

# Frontend base URL for CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# UltraMsg WhatsApp gateway
# URL format: https://api.ultramsg.com/instance{instanceId}/
ULTRAMSG_API_URL = os.getenv("ULTRAMSG_API_URL")
ULTRAMSG_INSTANCE_ID = os.getenv("ULTRAMSG_INSTANCE_ID")
ULTRAMSG_API_TOKEN = os.getenv("ULTRAMSG_API_TOKEN")
WHATSAPP_TIMEOUT = float(os.getenv("WHATSAPP_TIMEOUT", "10"))

# Fixed stakeholder channels (phone numbers with country code, digits only)
WHATSAPP_COORDINATOR_PHONE = os.getenv("WHATSAPP_COORDINATOR_PHONE")
WHATSAPP_CC_PHONES = [
    phone.strip() for phone in os.getenv("WHATSAPP_CC_PHONES", "").split(",") if phone.strip()
]
