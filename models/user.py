"""
User model for authentication.
"""

from datetime import datetime
import bcrypt
from flask import current_app, has_app_context
from flask_login import UserMixin
from extensions import db

DEFAULT_BCRYPT_ROUNDS = 10
# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def password_fits(password):
    """Return True if bcrypt can hash ``password`` without truncating it."""
    return (
        isinstance(password, str)
        and len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES
    )


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.Text, unique=True, nullable=False)
    password_hash = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    content = db.relationship(
        "Content", back_populates="user", lazy="dynamic", cascade="all, delete-orphan"
    )
    share_link = db.relationship(
        "ShareLink", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def set_password(self, password, rounds=None):
        """Hash password with bcrypt using the configured work factor."""
        if rounds is None:
            rounds = (
                current_app.config.get("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)
                if has_app_context()
                else DEFAULT_BCRYPT_ROUNDS
            )
        if not password_fits(password):
            raise ValueError(
                f"Password must be a string of at most {MAX_PASSWORD_BYTES} bytes"
            )
        salt = bcrypt.gensalt(rounds=rounds)
        self.password_hash = bcrypt.hashpw(password.encode("utf-8"), salt).decode(
            "utf-8"
        )

    def check_password(self, password):
        """Check if provided password matches the hash."""
        if not self.password_hash or not password_fits(password):
            return False
        return bcrypt.checkpw(
            password.encode("utf-8"), self.password_hash.encode("utf-8")
        )

    def __repr__(self):
        return f"<User {self.username}>"
