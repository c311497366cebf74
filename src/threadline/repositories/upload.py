import uuid
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete
from threadline.models.upload import Upload


class UploadRepository:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def delete(self, upload_id: uuid.UUID) -> int:
        """Delete a staged upload in its own transaction; returns rows removed."""
        try:
            res = await self.session.execute(delete(Upload).where(Upload.id == upload_id))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return res.rowcount or 0
