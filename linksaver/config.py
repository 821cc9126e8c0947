import os
import secrets
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent


class Config:
    ENV_NAME = os.environ.get("LINKSAVER_ENV", "production")
    SECRET_KEY = os.environ.get("SECRET_KEY", secrets.token_hex(32))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", f"sqlite:///{BASE_DIR / 'linksaver.db'}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET = os.environ.get("JWT_SECRET")
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_DAYS = int(os.environ.get("JWT_EXPIRES_DAYS", "7"))
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "10"))
    CONTENT_FETCH_TIMEOUT = float(os.environ.get("CONTENT_FETCH_TIMEOUT", "10"))
    CONTENT_MAX_BYTES = int(os.environ.get("CONTENT_MAX_BYTES", "2500000"))
    SUMMARY_ENDPOINT = os.environ.get("SUMMARY_ENDPOINT", "https://r.jina.ai/")
    SUMMARY_TIMEOUT = float(os.environ.get("SUMMARY_TIMEOUT", "20"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    ENV_NAME = "development"


class TestConfig(Config):
    TESTING = True
    ENV_NAME = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET = "linksaver-test-secret-0123456789abcdef"
    BCRYPT_ROUNDS = 4
    CONTENT_FETCH_TIMEOUT = 1.0
    SUMMARY_TIMEOUT = 1.0
