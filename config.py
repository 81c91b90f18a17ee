"""
Application configuration, read once from the environment at import time.
"""
import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./recordstore.db")
SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

PORT = int(os.getenv("PORT", 8000))

# First known sound recording (phonautograph, 1860)
MIN_RELEASE_YEAR = 1860

# Upper bounds on stored amounts
MAX_PRICE = 1_000_000.0
MAX_STOCK = 1_000_000
MAX_ORDER_QUANTITY = 10_000
