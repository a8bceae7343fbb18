"""
Content model for saved bookmarks (links with a type, title and tags).
"""

from datetime import datetime, timezone
from extensions import db


class Content(db.Model):
    __tablename__ = "content"

    id = db.Column(db.Integer, primary_key=True)
    link = db.Column(db.Text, nullable=False)
    type = db.Column(db.Text, nullable=True)
    title = db.Column(db.Text, nullable=True)
    tags = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", name="fk_content_user_id_users", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user = db.relationship("User", back_populates="content")

    def to_dict(self):
        """Serialize the bookmark, including its owner's id and username."""
        created_at_iso = None
        if self.created_at:
            created_at_iso = self.created_at.replace(tzinfo=timezone.utc).isoformat()

        return {
            "id": self.id,
            "link": self.link,
            "type": self.type,
            "title": self.title,
            "tags": list(self.tags or []),
            "user": (
                {"id": self.user.id, "username": self.user.username}
                if self.user
                else {"id": self.user_id, "username": None}
            ),
            "created_at": created_at_iso,
        }

    def __repr__(self):
        return f"<Content {self.id}: {self.title}>"
