import logging
from datetime import datetime, timedelta, timezone

import jwt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models.user import MAX_PASSWORD_BYTES, User, password_fits
from services.errors import (
    AuthenticationError,
    ConflictError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


class TokenIssuer:
    """Signs and verifies the bearer tokens handed out at signin."""

    def __init__(self, secret, algorithm="HS256", expires_seconds=None):
        if not secret:
            raise ValueError("A signing secret is required")
        self.secret = secret
        self.algorithm = algorithm
        self.expires_seconds = expires_seconds

    def issue(self, user_id):
        now = datetime.now(timezone.utc)
        payload = {"sub": str(user_id), "iat": now}
        if self.expires_seconds:
            payload["exp"] = now + timedelta(seconds=self.expires_seconds)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token):
        """Return the user id carried by ``token``.

        Raises:
            AuthenticationError: If the token is malformed, expired or
                signed with a different key.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected bearer token: {e}")
            raise AuthenticationError("Unauthorized") from e

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as e:
            raise AuthenticationError("Unauthorized") from e


def extract_token(header_value):
    """Pull the token out of an Authorization header.

    Both ``Bearer <token>`` and a bare token are accepted.
    """
    if not header_value:
        return None
    parts = header_value.split()
    if parts and parts[0].lower() == BEARER_SCHEME:
        parts = parts[1:]
    if len(parts) != 1:
        return None
    return parts[0]


def authenticate_request(request, issuer):
    """Resolve the calling user from a request's bearer token, or None."""
    token = extract_token(request.headers.get("Authorization"))
    if not token:
        return None
    try:
        user_id = issuer.verify(token)
    except AuthenticationError:
        return None
    return db.session.get(User, user_id)


def signup(username, password, rounds=None):
    """Create a new user with a bcrypt-hashed password.

    Raises:
        ValidationError: If username or password is missing, not a string,
            or the password is longer than bcrypt accepts.
        ConflictError: If the username is taken.
        StorageError: On any other database failure.
    """
    if not username or not password:
        raise ValidationError("Username and password are required")
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError("Username and password must be strings")
    if not password_fits(password):
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )

    try:
        if User.query.filter_by(username=username).first():
            raise ConflictError("Username already exists")

        user = User(username=username)
        user.set_password(password, rounds=rounds)
        db.session.add(user)
        db.session.commit()
    except IntegrityError as e:
        # Lost a race against a concurrent signup for the same username
        db.session.rollback()
        raise ConflictError("Username already exists") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception(f"Error during signup for {username}")
        raise StorageError() from e

    logger.info(f"User {username} signed up with id {user.id}")
    return user


def signin(username, password, issuer):
    """Check credentials and return a signed bearer token."""
    try:
        user = (
            User.query.filter_by(username=username).first()
            if isinstance(username, str) and username
            else None
        )
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception(f"Error during signin for {username}")
        raise StorageError() from e

    if not user or not user.check_password(password):
        logger.info(f"Failed signin attempt for {username}")
        raise AuthenticationError()

    return issuer.issue(user.id)
