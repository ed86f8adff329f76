"""
Runtime configuration.

Values come from the environment (a local .env is loaded by main.py).

  APP_ENV=production        -> session cookie gets the Secure flag
  SESSION_COOKIE_NAME=session
  SESSION_MAX_AGE=604800    -> seconds (7 days)
  CORS_ORIGINS=http://localhost:3000,https://example.com
  API_PREFIX=/api           -> mount every router under a prefix
  LOG_LEVEL=DEBUG
"""

import os

APP_ENV = os.environ.get("APP_ENV", "development")
COOKIE_SECURE = APP_ENV == "production"

SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "session")
SESSION_MAX_AGE = int(os.environ.get("SESSION_MAX_AGE", 60 * 60 * 24 * 7))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

API_PREFIX = os.environ.get("API_PREFIX", "").rstrip("/")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
