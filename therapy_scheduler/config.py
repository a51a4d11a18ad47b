from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


class Config:
    """Application configuration loaded from environment variables."""

    SECRET_KEY = os.getenv("SECRET_KEY", "change_me")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///therapy_scheduler.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"
    API_TITLE = os.getenv("API_TITLE", "Therapy Scheduler API")
    API_VERSION = os.getenv("API_VERSION", "0.1.0")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    RESTX_MASK_SWAGGER = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
