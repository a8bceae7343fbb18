from flask import jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_cors import CORS

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
cors = CORS()


@login_manager.unauthorized_handler
def unauthorized():
    """Reject requests that carry no valid bearer token."""
    return jsonify({"message": "Unauthorized"}), 401
