# ABOUTME: Runtime settings read from the environment (and an optional .env file).
# ABOUTME: Covers the HTTP server, logging, outbound HTTP client, and destinations dataset.

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "5174"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

HTTP_TIMEOUT = float(os.environ.get("HTTP_TIMEOUT", "5.0"))
HTTP_RETRY_ATTEMPTS = int(os.environ.get("HTTP_RETRY_ATTEMPTS", "2"))
HTTP_RETRY_MAX_WAIT = float(os.environ.get("HTTP_RETRY_MAX_WAIT", "5"))

DESTINATIONS_PATH = Path(os.environ.get("DESTINATIONS_PATH", "public/data/destinations.json"))

CORS_ORIGINS = tuple(o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip())
