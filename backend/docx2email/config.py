"""
Runtime configuration.
Values come from the environment (optionally a .env file) with dev defaults.
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

# Email template bounds (pixels). The editor offers 300-1200 in steps of 50.
DEFAULT_MAX_WIDTH = 600
MIN_WIDTH = 300
MAX_WIDTH = 1200

DEFAULT_FONT_FAMILY = "Arial, sans-serif"

# Fonts with good Vietnamese Unicode coverage and proper bold weights
FONT_OPTIONS = [
    {"value": "Arial, Helvetica, sans-serif", "label": "Arial"},
    {"value": "Times New Roman, Times, serif", "label": "Times New Roman"},
    {"value": "Tahoma, Geneva, sans-serif", "label": "Tahoma"},
    {"value": "Verdana, Geneva, sans-serif", "label": "Verdana"},
    {"value": "Georgia, Times, serif", "label": "Georgia"},
    {"value": "Trebuchet MS, Helvetica, sans-serif", "label": "Trebuchet MS"},
    {"value": "Segoe UI, Tahoma, sans-serif", "label": "Segoe UI"},
    {"value": "Calibri, Arial, sans-serif", "label": "Calibri"},
]

HOST_PORT = os.getenv("HOST_PORT", "8000")

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))  # 10 MB

PDF_RENDER_TIMEOUT_MS = int(os.getenv("PDF_RENDER_TIMEOUT_MS", "30000"))

# Vite dev server for the editor UI
_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def get_cors_origins() -> List[str]:
    """
    Build the list of allowed CORS origins.

    The local dev origins are always included. Additional origins are read
    from the CORS_ORIGINS environment variable as a comma-separated list, e.g.:
        CORS_ORIGINS=https://mail-tools.example.com,https://preview.example.com

    Duplicates are removed while preserving order.
    """
    extra_origins: List[str] = []
    cors_env = os.getenv("CORS_ORIGINS", "").strip()
    if cors_env:
        extra_origins = [o.strip() for o in cors_env.split(",") if o.strip()]

    seen: set = set()
    origins: List[str] = []
    for origin in _DEV_ORIGINS + extra_origins:
        if origin not in seen:
            seen.add(origin)
            origins.append(origin)

    return origins


def clamp_width(value: int) -> int:
    """Clamp a requested template width into [MIN_WIDTH, MAX_WIDTH]."""
    return max(MIN_WIDTH, min(MAX_WIDTH, int(value)))
