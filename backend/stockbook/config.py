# backend/stockbook/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/stockbook.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///stockbook.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Sale dates are calendar dates in the shop's own timezone
    SHOP_TIMEZONE = os.environ.get("SHOP_TIMEZONE", "Africa/Nairobi")
    CURRENCY = os.environ.get("CURRENCY", "KSH")

    # Language-model API used for the financial summary
    TEXTGEN_API_KEY = os.environ.get("TEXTGEN_API_KEY", "")
    TEXTGEN_MODEL = os.environ.get("TEXTGEN_MODEL", "gemini-3-flash-preview")
    TEXTGEN_BASE_URL = os.environ.get(
        "TEXTGEN_BASE_URL",
        "https://generativelanguage.googleapis.com/v1beta",
    )
    TEXTGEN_TIMEOUT_SECONDS = float(os.environ.get("TEXTGEN_TIMEOUT_SECONDS", "30"))
