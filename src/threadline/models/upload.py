import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime
from threadline.db.session import Base
from threadline.models._timestamps import utcnow

class Upload(Base):
    """File staged before the thread that uses it exists.

    Consumed (deleted) once a thread referencing it via ``uploadId`` is saved.
    """
    __tablename__ = "upload"
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
