import logging

from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.content import Content
from services.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)


def _normalize_tags(tags):
    if tags is None:
        return []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise ValidationError("Tags must be a list of strings")
    return tags


def create_content_item(
    user_id: int,
    link: str,
    type: str | None = None,
    title: str | None = None,
    tags: list[str] | None = None,
):
    """
    Save a bookmark for a user.

    Args:
        user_id: The ID of the owning user.
        link: The bookmarked URI.
        type: Optional type tag (e.g. "youtube", "tweet").
        title: Optional title.
        tags: Optional list of classification tags.

    Returns:
        The created Content object.

    Raises:
        ValidationError: If the link is missing or tags are malformed.
        StorageError: If the database write fails.
    """
    if not link:
        raise ValidationError("Link is required")
    tags = _normalize_tags(tags)

    try:
        content = Content(user_id=user_id, link=link, type=type, title=title, tags=tags)
        db.session.add(content)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception(f"Error adding content for user_id {user_id}")
        raise StorageError("Failed to add content") from e

    logger.info(f"Content {content.id} added for user_id {user_id}")
    return content


def list_content_items(user_id):
    """Return every bookmark owned by a user, oldest first."""
    try:
        return (
            Content.query.filter_by(user_id=user_id)
            .order_by(Content.created_at, Content.id)
            .all()
        )
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception(f"Error fetching content for user_id {user_id}")
        raise StorageError("Failed to fetch content") from e


def delete_content_item(user_id, content_id):
    """Delete a bookmark if it belongs to the user. Returns the deleted count."""
    try:
        deleted = Content.query.filter_by(id=content_id, user_id=user_id).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception(f"Error deleting content {content_id} for user_id {user_id}")
        raise StorageError("Failed to delete content") from e

    logger.info(f"Deleted {deleted} content item(s) with id {content_id} for user_id {user_id}")
    return deleted
