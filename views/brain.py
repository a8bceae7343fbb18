from flask import Blueprint, current_app, jsonify
from flask_login import login_required, current_user
import logging

from services.errors import NotFoundError, StorageError, ValidationError
from views.helpers import get_json_object

logger = logging.getLogger(__name__)

bp = Blueprint("brain", __name__, url_prefix="/api/v1/brain")


def _manager():
    return current_app.extensions["share_links"]


def _unpublish():
    try:
        _manager().unpublish(current_user.id)
    except StorageError as e:
        return jsonify({"message": e.message}), 500
    return jsonify({"message": "Removed link"})


@bp.route("/share", methods=["POST"])
@login_required
def update_share():
    """Publish (``{"share": true}``) or unpublish the current user's brain."""
    try:
        data = get_json_object()
    except ValidationError as e:
        return jsonify({"message": e.message}), e.status_code

    if not data.get("share"):
        return _unpublish()

    try:
        token = _manager().publish(current_user.id)
    except StorageError as e:
        return jsonify({"message": e.message}), 500

    return jsonify({"hash": token})


@bp.route("/share", methods=["DELETE"])
@login_required
def remove_share():
    """Unpublish the current user's brain."""
    return _unpublish()


@bp.route("/share", methods=["GET"])
@login_required
def share_status():
    """Report whether the current user's brain is published."""
    try:
        token = _manager().status(current_user.id)
    except StorageError as e:
        return jsonify({"message": e.message}), 500

    return jsonify({"shared": token is not None, "hash": token})


@bp.route("/<share_link>", methods=["GET"])
def get_shared_brain(share_link):
    """Public, read-only view of a published brain."""
    try:
        brain = _manager().resolve(share_link)
    except NotFoundError as e:
        logger.info(f"Shared brain lookup failed: {e.message}")
        return jsonify({"message": e.message}), 404
    except StorageError as e:
        return jsonify({"message": e.message}), 500

    return jsonify(brain.to_dict())
