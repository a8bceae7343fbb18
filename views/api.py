from flask import Blueprint, jsonify
from flask_login import login_required, current_user
import logging

from services.content_service import (
    create_content_item,
    delete_content_item,
    list_content_items,
)
from services.errors import BrainshareError, ValidationError
from views.helpers import get_json_object

logger = logging.getLogger(__name__)  # Initialize the logger for this module

# Create a blueprint for content routes
bp = Blueprint("api", __name__, url_prefix="/api/v1")


def error_response(error):
    return jsonify({"message": error.message}), error.status_code


@bp.route("/content", methods=["POST"])
@login_required
def add_content():
    """Save a bookmark for the current user."""
    try:
        data = get_json_object()
        create_content_item(
            user_id=current_user.id,
            link=data.get("link"),
            type=data.get("type"),
            title=data.get("title"),
            tags=data.get("tags"),
        )
    except BrainshareError as e:
        return error_response(e)

    return jsonify({"message": "Content added"})


@bp.route("/content", methods=["GET"])
@login_required
def get_content():
    """List the current user's bookmarks."""
    try:
        items = list_content_items(current_user.id)
    except BrainshareError as e:
        return error_response(e)

    return jsonify({"content": [item.to_dict() for item in items]})


@bp.route("/content", methods=["DELETE"])
@login_required
def delete_content():
    """Delete one of the current user's bookmarks."""
    try:
        content_id = get_json_object().get("contentId")
        if content_id is None:
            raise ValidationError("contentId is required")
        try:
            content_id = int(content_id)
        except (TypeError, ValueError):
            raise ValidationError("contentId must be an integer")

        delete_content_item(current_user.id, content_id)
    except BrainshareError as e:
        return error_response(e)

    return jsonify({"message": "Deleted"})
