import os
import logging

from dotenv import load_dotenv

config_logger = logging.getLogger(__name__)

load_dotenv()


class Config:
    """Base configuration class."""

    # Flask configuration
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key-please-change")

    # Database configuration
    # Construct default SQLite path relative to this config file's directory
    _DEFAULT_SQLITE_PATH = os.path.join(
        os.path.abspath(os.path.dirname(__file__)), "brainshare.db"
    )
    _DEFAULT_SQLALCHEMY_DATABASE_URI = "sqlite:///" + _DEFAULT_SQLITE_PATH

    database_url_env = os.environ.get("DATABASE_URL")
    if database_url_env:
        if database_url_env.startswith("postgres://"):
            # Handle Heroku-style 'postgres://' prefix
            SQLALCHEMY_DATABASE_URI = database_url_env.replace(
                "postgres://", "postgresql://", 1
            )
        else:
            SQLALCHEMY_DATABASE_URI = database_url_env
    else:
        SQLALCHEMY_DATABASE_URI = _DEFAULT_SQLALCHEMY_DATABASE_URI

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bearer token configuration
    JWT_SECRET = os.environ.get("JWT_SECRET")
    JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
    raw_jwt_expires = os.environ.get("JWT_EXPIRES_SECONDS")
    JWT_EXPIRES_SECONDS = int(raw_jwt_expires) if raw_jwt_expires else None

    # Password hashing
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", 10))

    # Share links
    SHARE_TOKEN_LENGTH = int(os.environ.get("SHARE_TOKEN_LENGTH", 10))
    SHARE_TOKEN_MAX_ATTEMPTS = int(os.environ.get("SHARE_TOKEN_MAX_ATTEMPTS", 5))

    # CORS
    raw_cors_origins = os.environ.get("CORS_ORIGINS", "*")
    if "|" in raw_cors_origins:
        CORS_ORIGINS = raw_cors_origins.split("|")
    else:
        CORS_ORIGINS = raw_cors_origins

    PORT = int(os.environ.get("PORT", 5001))

    # The signing secret is required outside of testing
    TESTING = os.environ.get("TESTING", "false").lower() == "true"
    if not TESTING:
        if not JWT_SECRET:
            raise ValueError("JWT_SECRET is required to sign bearer tokens")
    elif not JWT_SECRET:
        JWT_SECRET = "test-jwt-secret"


if Config.SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
    config_logger.info(
        f"Configuration: using SQLite database at {Config.SQLALCHEMY_DATABASE_URI}"
    )
else:
    uri_to_log = Config.SQLALCHEMY_DATABASE_URI.split("@")[-1]
    config_logger.info(f"Configuration: using database at {uri_to_log}")
