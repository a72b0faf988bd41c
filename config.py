"""
AIT Import - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR   = Path(__file__).resolve().parent
UPLOAD_DIR = Path(os.environ.get("AITIMPORT_UPLOAD_DIR", BASE_DIR / "uploads"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("AITIMPORT_DB", f"sqlite:///{BASE_DIR / 'aitimport.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("AITIMPORT_HOST", "0.0.0.0")
PORT   = int(os.environ.get("AITIMPORT_PORT", "5000"))
DEBUG  = os.environ.get("AITIMPORT_DEBUG", "0") == "1"
SECRET = os.environ.get("AITIMPORT_SECRET", "aitimport-dev-key-change-in-prod")
MAX_UPLOAD_BYTES = int(os.environ.get("AITIMPORT_MAX_UPLOAD_BYTES", str(16 * 1024 * 1024)))

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("AITIMPORT_LOG_LEVEL", "INFO").upper()

# ── Import files ───────────────────────────────────────────────────────
FILE_ENCODING = os.environ.get("AITIMPORT_FILE_ENCODING", "utf-8")

# ── Ambient context defaults (API / CLI callers) ───────────────────────
# Used when the caller does not say which client/org/user runs the import.
DEFAULT_CLIENT_ID = int(os.environ.get("AITIMPORT_CLIENT_ID", "0"))
DEFAULT_ORG_ID    = int(os.environ.get("AITIMPORT_ORG_ID", "0"))
DEFAULT_USER_ID   = int(os.environ.get("AITIMPORT_USER_ID", "100"))

# ── Pagination ─────────────────────────────────────────────────────────
API_MAX_LIMIT     = 1000
API_DEFAULT_LIMIT = 100
