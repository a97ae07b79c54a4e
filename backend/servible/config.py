import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Tokens are issued by the hosted auth provider, we only verify them
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret")

    # Public site routing
    PLATFORM_DOMAIN = os.getenv("PLATFORM_DOMAIN", "servible.app")
    PREVIEW_SALT = os.getenv("PREVIEW_SALT", "servible-preview")
    PREVIEW_COOKIE_NAME = "__servible_preview"
    PREVIEW_COOKIE_MAX_AGE = 60 * 60 * 24
    PREVIEW_COOKIE_SECURE = False

    # Stock photography
    FREEPIK_API_KEY = os.getenv("FREEPIK_API_KEY")
    FREEPIK_BASE_URL = os.getenv("FREEPIK_BASE_URL", "https://api.freepik.com/v1")
    STOCK_API_TIMEOUT = float(os.getenv("STOCK_API_TIMEOUT", "20"))
    ENRICHMENT_CONCURRENCY = 3

    # Media store
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    MEDIA_BASE_URL = os.getenv("MEDIA_BASE_URL", "/uploads")
    MEDIA_MAX_UPLOAD_BYTES = 10 * 1024 * 1024

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///servible-dev.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")
    PREVIEW_COOKIE_SECURE = True

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "test-jwt-secret-0123456789abcdef0123456789"
    PLATFORM_DOMAIN = "servible.test"
    FREEPIK_API_KEY = "test-key"

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
