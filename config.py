"""
Service Configuration
Reads settings from the environment (and a local .env file)
"""

import os
from dotenv import load_dotenv

from analytics.one_rep_max import OneRepMaxFormula

# Load environment variables
load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",   # Frontend dev server
    "http://localhost:8080",
    "http://127.0.0.1:5500",   # VS Code Live Server
    "null"                      # Local file:// access
]


def _split_origins(value):
    return [origin.strip() for origin in value.split(",") if origin.strip()]


ONE_REP_MAX_FORMULA = OneRepMaxFormula.resolve(os.getenv("ONE_REP_MAX_FORMULA", "EPLEY"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", 8000))
CORS_ORIGINS = _split_origins(os.getenv("CORS_ORIGINS", "")) or DEFAULT_CORS_ORIGINS
