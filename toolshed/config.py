import os


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///toolshed.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Tokens are issued by the campus identity provider; we only verify them.
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-super-secret")

    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = True
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "noreply@toolshed.local")

    SCHEDULER_ENABLED = os.getenv("SCHEDULER_ENABLED", "1") == "1"
    DUE_CHECK_INTERVAL_MINUTES = int(os.getenv("DUE_CHECK_INTERVAL_MINUTES", "10"))
    DUE_SOON_HOURS = int(os.getenv("DUE_SOON_HOURS", "24"))

    # how many times a checkout/return is replayed after a version conflict
    LENDING_CONFLICT_RETRIES = int(os.getenv("LENDING_CONFLICT_RETRIES", "2"))
    INVENTORY_MAX_PAGE_SIZE = int(os.getenv("INVENTORY_MAX_PAGE_SIZE", "100"))


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    MAIL_SUPPRESS_SEND = True
    SCHEDULER_ENABLED = False
