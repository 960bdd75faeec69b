"""Configuration for the Flask application."""

import os
from pathlib import Path


class Config:
    """Flask configuration."""

    # Flask settings
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # CORS settings
    CORS_ORIGINS = "*"

    # Request size limit for uploaded tree text
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB

    # Editing sessions kept in memory before the oldest is evicted
    MAX_SESSIONS = int(os.environ.get("NHXEDIT_MAX_SESSIONS", "256"))

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_DIR = Path(os.environ.get("LOG_DIR", "logs"))
