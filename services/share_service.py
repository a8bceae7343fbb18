"""
Share-link issuance and resolution.

A user publishes their saved content as a read-only "shared brain" reachable
through an opaque token. Each user has at most one live token; publishing
again returns the same token, and unpublishing revokes it.
"""

import logging
import secrets
import string
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models.content import Content
from models.share_link import ShareLink
from models.user import User
from services.errors import ShareLinkNotFound, ShareOwnerNotFound, StorageError

logger = logging.getLogger(__name__)

TOKEN_ALPHABET = string.ascii_letters + string.digits
DEFAULT_TOKEN_LENGTH = 10
DEFAULT_MAX_ATTEMPTS = 5
PUBLISH_FAILED_MESSAGE = "Failed to update share settings"


def generate_token(length=DEFAULT_TOKEN_LENGTH, alphabet=TOKEN_ALPHABET):
    """Return ``length`` characters drawn uniformly from ``alphabet``.

    Characters come from the operating system's CSPRNG.
    """
    if length < 1:
        raise ValueError("Token length must be positive")
    return "".join(secrets.choice(alphabet) for _ in range(length))


@dataclass
class SharedBrain:
    """The public view of a user's collection behind a share token."""

    username: str
    content: list = field(default_factory=list)

    def to_dict(self):
        return {
            "username": self.username,
            "content": [item.to_dict() for item in self.content],
        }


class ShareLinkManager:
    """Publishes, revokes and resolves share links."""

    def __init__(
        self,
        token_length=DEFAULT_TOKEN_LENGTH,
        max_attempts=DEFAULT_MAX_ATTEMPTS,
        token_factory=None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.token_length = token_length
        self.max_attempts = max_attempts
        self.token_factory = token_factory or generate_token

    def _find_by_user(self, user_id):
        try:
            return ShareLink.find_by_user(user_id)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception(f"Error looking up share link for user_id {user_id}")
            raise StorageError(PUBLISH_FAILED_MESSAGE) from e

    def status(self, user_id):
        """Return the user's current token without creating one."""
        link = self._find_by_user(user_id)
        return link.hash if link else None

    def publish(self, user_id):
        """Return the user's share token, creating it on first call.

        Repeated calls never rotate the token. Concurrent first calls for the
        same user converge on a single row through the unique index on
        ``share_links.user_id``: the loser re-reads and returns the winner's
        token.

        Raises:
            StorageError: If the database fails, or no unique token could be
                generated within ``max_attempts``.
        """
        existing = self._find_by_user(user_id)
        if existing:
            logger.info(f"Returning existing share link for user_id {user_id}")
            return existing.hash

        for attempt in range(1, self.max_attempts + 1):
            token = self.token_factory(self.token_length)
            try:
                db.session.add(ShareLink(user_id=user_id, hash=token))
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                winner = self._find_by_user(user_id)
                if winner:
                    logger.info(
                        f"Concurrent publish for user_id {user_id} already created a link"
                    )
                    return winner.hash
                logger.warning(
                    f"Share token collision for user_id {user_id} "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
                continue
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.exception(f"Error creating share link for user_id {user_id}")
                raise StorageError(PUBLISH_FAILED_MESSAGE) from e

            logger.info(f"Published share link for user_id {user_id}")
            return token

        logger.error(
            f"Could not generate a unique share token for user_id {user_id} "
            f"after {self.max_attempts} attempts"
        )
        raise StorageError(PUBLISH_FAILED_MESSAGE)

    def unpublish(self, user_id):
        """Revoke the user's share link. Returns True if one existed."""
        try:
            deleted = ShareLink.query.filter_by(user_id=user_id).delete()
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception(f"Error removing share link for user_id {user_id}")
            raise StorageError(PUBLISH_FAILED_MESSAGE) from e

        if deleted:
            logger.info(f"Removed share link for user_id {user_id}")
        return bool(deleted)

    def resolve(self, token):
        """Return the username and full collection behind a share token.

        Raises:
            ShareLinkNotFound: No link has this exact token.
            ShareOwnerNotFound: The link's owner no longer exists.
            StorageError: If the database fails.
        """
        try:
            link = ShareLink.find_by_hash(token)
            if not link:
                raise ShareLinkNotFound()

            owner = db.session.get(User, link.user_id)
            if not owner:
                logger.info(
                    f"Share link {link.id} points at missing user_id {link.user_id}"
                )
                raise ShareOwnerNotFound()

            content = (
                Content.query.filter_by(user_id=link.user_id)
                .order_by(Content.created_at, Content.id)
                .all()
            )
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception("Error resolving share link")
            raise StorageError("Failed to fetch shared content") from e

        return SharedBrain(username=owner.username, content=content)
