"""Named resume drafts persisted in the collection store."""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from app.models.resume import ResumeData, SavedResume
from app.services.exceptions import ResumeNotFoundError
from app.services.store import CollectionStore, parse_records

logger = logging.getLogger(__name__)


class ResumeStorageService:
    """
    CRUD over saved resume drafts.

    Every record is read from and written to the store as a whole collection.
    Resume data is copied on the way in and on the way out, so callers can
    keep editing their own ResumeData without touching what was saved.
    """

    COLLECTION = "saved_resumes"

    def __init__(self, store: CollectionStore):
        self.store = store

    async def _get_stored_resumes(self) -> list[SavedResume]:
        records = await self.store.read_all(self.COLLECTION)
        return parse_records(SavedResume, self.COLLECTION, records)

    async def _set_stored_resumes(self, resumes: list[SavedResume]) -> None:
        records = [r.model_dump(by_alias=True, mode="json") for r in resumes]
        await self.store.write_all(self.COLLECTION, records)

    async def save_resume(self, name: str, resume_data: ResumeData) -> str:
        """Store a new draft and return its id."""
        resumes = await self._get_stored_resumes()
        now = datetime.now(timezone.utc)

        saved = SavedResume(
            id=uuid.uuid4().hex,
            name=name,
            resume_data=resume_data.model_copy(deep=True),
            created_at=now,
            updated_at=now,
        )
        resumes.append(saved)
        await self._set_stored_resumes(resumes)

        logger.info(f"Saved resume '{name}' as {saved.id}")
        return saved.id

    async def get_resume(self, resume_id: str) -> Optional[SavedResume]:
        resumes = await self._get_stored_resumes()
        return next((r for r in resumes if r.id == resume_id), None)

    async def load_resume(self, resume_id: str) -> Optional[ResumeData]:
        """Return the resume data of a draft, or None if it does not exist."""
        saved = await self.get_resume(resume_id)
        return saved.resume_data if saved else None

    async def get_all_resumes(self) -> list[SavedResume]:
        """All drafts, most recently updated first."""
        resumes = await self._get_stored_resumes()
        return sorted(resumes, key=lambda r: r.updated_at, reverse=True)

    async def update_resume(self, resume_id: str, name: str, resume_data: ResumeData) -> SavedResume:
        """
        Replace the name and data of an existing draft.

        Raises:
            ResumeNotFoundError: If no draft has the given id
        """
        resumes = await self._get_stored_resumes()
        for index, existing in enumerate(resumes):
            if existing.id == resume_id:
                break
        else:
            raise ResumeNotFoundError(resume_id)

        updated = existing.model_copy(update={
            "name": name,
            "resume_data": resume_data.model_copy(deep=True),
            "updated_at": datetime.now(timezone.utc),
        })
        resumes[index] = updated
        await self._set_stored_resumes(resumes)

        logger.info(f"Updated resume {resume_id}")
        return updated

    async def delete_resume(self, resume_id: str) -> None:
        """Remove a draft. Unknown ids are ignored."""
        resumes = await self._get_stored_resumes()
        remaining = [r for r in resumes if r.id != resume_id]
        if len(remaining) != len(resumes):
            await self._set_stored_resumes(remaining)
            logger.info(f"Deleted resume {resume_id}")
