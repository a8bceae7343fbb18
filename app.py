import logging
import sys

# Configure logging to output to STDOUT with a more detailed format
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

from flask import Flask, current_app

from extensions import db, login_manager, migrate, cors
from cli import init_db, create_user, unpublish_command
from config import Config
from services.auth_service import TokenIssuer, authenticate_request
from services.share_service import ShareLinkManager

# Import blueprints from views package
from views.api import bp as api_bp
from views.auth import bp as auth_bp
from views.brain import bp as brain_bp


def create_app(config_object=Config, overrides=None):
    """Create and configure the Flask application.

    ``overrides`` is applied on top of ``config_object`` before any extension
    or service reads the configuration.
    """
    app = Flask(__name__)

    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if not db_uri:
        app.logger.warning("SQLALCHEMY_DATABASE_URI is not configured.")
    elif "postgres" in db_uri:
        # Avoid logging sensitive parts of the URI if present
        uri_to_log = db_uri.split("@")[-1] if "@" in db_uri else db_uri
        app.logger.info(f"Using PostgreSQL database: {uri_to_log}")
    elif "sqlite" in db_uri:
        app.logger.info(f"Using SQLite database: {db_uri}")
    else:
        uri_scheme = db_uri.split(":")[0] if ":" in db_uri else "Unknown"
        app.logger.info(f"Using {uri_scheme} database.")

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    # Services are built once from configuration and shared by the views
    token_issuer = TokenIssuer(
        app.config["JWT_SECRET"],
        algorithm=app.config.get("JWT_ALGORITHM", "HS256"),
        expires_seconds=app.config.get("JWT_EXPIRES_SECONDS"),
    )
    app.extensions["token_issuer"] = token_issuer
    app.extensions["share_links"] = ShareLinkManager(
        token_length=app.config.get("SHARE_TOKEN_LENGTH", 10),
        max_attempts=app.config.get("SHARE_TOKEN_MAX_ATTEMPTS", 5),
    )

    # Bearer token authentication for Flask-Login
    @login_manager.request_loader
    def load_user_from_request(req):
        """Load the user named by the request's bearer token."""
        return authenticate_request(req, current_app.extensions["token_issuer"])

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(brain_bp)

    # Register CLI commands
    app.cli.add_command(init_db)
    app.cli.add_command(create_user)
    app.cli.add_command(unpublish_command)

    return app


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
    app.run(debug=True, host="0.0.0.0", port=app.config["PORT"])
