import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to app.py as otp.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "otp.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Email (SMTP)
    SMTP_HOST = os.getenv("SMTP_HOST")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME = os.getenv("SMTP_USERNAME")
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
    SMTP_FROM_EMAIL = os.getenv("SMTP_FROM_EMAIL")
    SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

    # One-time codes
    OTP_LENGTH = int(os.getenv("OTP_LENGTH", "6"))
    OTP_HASH_ROUNDS = int(os.getenv("OTP_HASH_ROUNDS", "10"))  # bcrypt cost
    OTP_TTL_SECONDS = int(os.getenv("OTP_TTL_SECONDS", "0"))   # 0 = codes never expire

    # Branding used when the global_settings row is missing or blank
    DEFAULT_APP_NAME = os.getenv("DEFAULT_APP_NAME", "Account Services")
    DEFAULT_APP_LOGO = os.getenv("DEFAULT_APP_LOGO", "")

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SMTP_HOST = None
    OTP_HASH_ROUNDS = 4   # bcrypt minimum, keeps tests fast
    OTP_TTL_SECONDS = 0
