from dotenv import load_dotenv
load_dotenv()  # Load environment variables from .env file

import os


def _as_bool(value, default=False):
    if value is None:
        return default
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration class."""
    APP_NAME = os.getenv("APP_NAME", "FletoAds")

    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    DEBUG = _as_bool(os.getenv("FLASK_DEBUG"), False)
    TESTING = False

    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/fletoads")
    DB_NAME = os.getenv("DB_NAME", "fletoads")

    # ========================================
    # SESSION TOKENS
    # ========================================
    TOKEN_TTL_MINUTES = int(os.getenv("TOKEN_TTL_MINUTES", 60 * 24))

    # ========================================
    # PLAN LIMITS
    # ========================================
    # Usage is reported either way; creation is only blocked when enabled.
    ENFORCE_PLAN_LIMITS = _as_bool(os.getenv("ENFORCE_PLAN_LIMITS"), False)

    # ========================================
    # HTTP
    # ========================================
    ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_ENABLED = _as_bool(os.getenv("RATELIMIT_ENABLED"), True)

    # ========================================
    # EXTERNAL COLLABORATORS (opaque)
    # ========================================
    MAIL_SERVER = os.getenv("MAIL_SERVER")
    MAIL_PORT = int(os.getenv("MAIL_PORT", 587))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    BLOB_READ_WRITE_TOKEN = os.getenv("BLOB_READ_WRITE_TOKEN")

    # OpenAPI (flask-smorest)
    API_TITLE = "FletoAds API"
    API_VERSION = "v1"
    OPENAPI_VERSION = "3.0.3"
    OPENAPI_URL_PREFIX = "/api"
    OPENAPI_JSON_PATH = "openapi.json"
    OPENAPI_SWAGGER_UI_PATH = "/docs"
    OPENAPI_SWAGGER_UI_URL = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    MONGO_URI = os.getenv("TEST_MONGO_URI", "mongodb://localhost:27017/fletoads_test")
    DB_NAME = "fletoads_test"
    RATELIMIT_ENABLED = False
    ENFORCE_PLAN_LIMITS = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    MONGO_URI = os.getenv("PROD_MONGO_URI", os.getenv("MONGO_URI", "mongodb://localhost:27017/fletoads"))


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def load_config(app, config_class=None):
    load_dotenv()
    if config_class is None:
        config_class = CONFIG_BY_ENV.get(os.getenv("APP_ENV", "development"), DevelopmentConfig)
    app.config.from_object(config_class)
