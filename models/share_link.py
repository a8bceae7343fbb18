from datetime import datetime
from extensions import db


class ShareLink(db.Model):
    """Model representing a user's published "shared brain" token."""

    __tablename__ = "share_links"

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # One link per user and one user per token, enforced by the database
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    hash = db.Column(db.Text, nullable=False, unique=True)

    user = db.relationship("User", back_populates="share_link")

    def __repr__(self):
        return f"<ShareLink {self.hash} for user {self.user_id}>"

    @classmethod
    def find_by_user(cls, user_id):
        """Return the share link owned by a user, if any."""
        return cls.query.filter_by(user_id=user_id).first()

    @classmethod
    def find_by_hash(cls, token):
        """Return the share link with exactly this token, if any."""
        return cls.query.filter_by(hash=token).first()
