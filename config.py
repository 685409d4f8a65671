"""Application configuration loaded from environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()

# Aoryx API
AORYX_API_KEY: str = os.environ.get("AORYX_API_KEY", "")
AORYX_BASE_URL: str = os.environ.get("AORYX_BASE_URL", "")
AORYX_CUSTOMER_CODE: str = os.environ.get("AORYX_CUSTOMER_CODE", "")
AORYX_TIMEOUT_MS: int = int(os.environ.get("AORYX_TIMEOUT_MS", "15000"))
AORYX_DEFAULT_CURRENCY: str = os.environ.get("AORYX_DEFAULT_CURRENCY", "USD")
AORYX_TASSPRO_CUSTOMER_CODE: str = os.environ.get("AORYX_TASSPRO_CUSTOMER_CODE", "")
AORYX_TASSPRO_REGION_ID: str = os.environ.get("AORYX_TASSPRO_REGION_ID", "")

# MongoDB
MONGO_URL: str = os.environ.get("MONGO_URL", "mongodb://localhost:27017")
DB_NAME: str = os.environ.get("DB_NAME", "megatours")

# Sessions (HS256 bearer tokens issued by the auth service)
SESSION_SECRET: str = os.environ.get("SESSION_SECRET", "dev_session_secret_change_me")

# AMD exchange rates used until an override is stored in the database
AMD_RATE_USD: float = float(os.environ.get("AMD_RATE_USD", "390"))
AMD_RATE_EUR: float = float(os.environ.get("AMD_RATE_EUR", "420"))

# Logging
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

# CORS
CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
]
