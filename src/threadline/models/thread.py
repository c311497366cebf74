import uuid
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, ForeignKey, Text, DateTime
from threadline.db.session import Base
from threadline.models._timestamps import utcnow

if TYPE_CHECKING:
    from threadline.models.user import User
    from threadline.models.like import Like
    from threadline.models.reply import Reply

class Thread(Base):
    """User-authored post.

    The id is generated by the service layer, not by the database, so no
    column default is declared. Likes and replies are removed by the database
    (``ON DELETE CASCADE``) when a thread is deleted with a bulk statement.
    """
    __tablename__ = "thread"
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    user: Mapped["User"] = relationship()
    likes: Mapped[list["Like"]] = relationship(back_populates="thread", passive_deletes=True)
    replies: Mapped[list["Reply"]] = relationship(back_populates="thread", passive_deletes=True)
