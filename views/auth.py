from flask import Blueprint, current_app, jsonify
import logging

from services.auth_service import signin as signin_user, signup as signup_user
from services.errors import BrainshareError
from views.helpers import get_json_object

# Set up logging
logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__, url_prefix="/api/v1")


@bp.route("/signup", methods=["POST"])
def signup():
    """Register a new user."""
    try:
        data = get_json_object()
        signup_user(
            data.get("username"),
            data.get("password"),
            rounds=current_app.config.get("BCRYPT_ROUNDS"),
        )
    except BrainshareError as e:
        return jsonify({"message": e.message}), e.status_code

    return jsonify({"message": "User signed up successfully"}), 201


@bp.route("/signin", methods=["POST"])
def signin():
    """Exchange a username and password for a bearer token."""
    try:
        data = get_json_object()
        token = signin_user(
            data.get("username"),
            data.get("password"),
            current_app.extensions["token_issuer"],
        )
    except BrainshareError as e:
        return jsonify({"message": e.message}), e.status_code

    return jsonify({"token": token})
