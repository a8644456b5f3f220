"""
Centralized runtime configuration.

Values come from the environment (and an optional .env file for local runs).
The size ceiling and allowed content types are fixed by the edge platform
and are not meant to be overridden per deployment.
"""
import os
import logging

from dotenv import load_dotenv

load_dotenv()

# ── Platform limits ───────────────────────────────────────────────────────────
MAX_BODY_SIZE = 1_330_000   # base64 body bytes accepted by the edge runtime
DEFAULT_QUALITY = 82

GIF_CONTENT_TYPE      = "image/gif"
ALLOWED_CONTENT_TYPES = frozenset({"image/gif", "image/jpeg", "image/png"})

# ── Environment ───────────────────────────────────────────────────────────────
LOG_LEVEL      = os.environ.get("LOG_LEVEL", "INFO").upper()
S3_ENDPOINT    = os.environ.get("S3_ENDPOINT") or None
DEFAULT_REGION = os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or None


def configure_logging() -> None:
    """Apply LOG_LEVEL to the root logger (the Lambda runtime installs the handler)."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
