"""Public, read-only resume snapshots addressed by an opaque share id."""
import logging
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional

from app.models.resume import PublicResume, ResumeData
from app.services.exceptions import ShareNotFoundError
from app.services.store import CollectionStore, parse_records

logger = logging.getLogger(__name__)


class PublicSharingService:
    """
    Lifecycle of public resume snapshots.

    A snapshot is a copy of the resume data at publish time. Editing the
    draft afterwards does not change it; update_public_resume() must be
    called explicitly. Inactive snapshots stay stored but are hidden from
    get_public_resume().
    """

    COLLECTION = "public_resumes"
    SHARE_ID_BYTES = 16

    def __init__(self, store: CollectionStore, base_url: str):
        self.store = store
        self.base_url = base_url.rstrip("/")

    def _generate_share_id(self) -> str:
        return secrets.token_urlsafe(self.SHARE_ID_BYTES)

    def share_url(self, share_id: str) -> str:
        """Public URL for a share id."""
        return f"{self.base_url}/resume/{share_id}"

    async def _get_stored_public_resumes(self) -> list[PublicResume]:
        records = await self.store.read_all(self.COLLECTION)
        return parse_records(PublicResume, self.COLLECTION, records)

    async def _set_stored_public_resumes(self, resumes: list[PublicResume]) -> None:
        records = [r.model_dump(by_alias=True, mode="json") for r in resumes]
        await self.store.write_all(self.COLLECTION, records)

    @staticmethod
    def _find_index(resumes: list[PublicResume], share_id: str) -> int:
        for index, resume in enumerate(resumes):
            if resume.share_id == share_id:
                return index
        return -1

    async def create_public_resume(self, name: str, resume_data: ResumeData) -> str:
        """Publish a snapshot and return its share id."""
        resumes = await self._get_stored_public_resumes()

        snapshot = PublicResume(
            id=uuid.uuid4().hex,
            share_id=self._generate_share_id(),
            name=name,
            resume_data=resume_data.model_copy(deep=True),
            created_at=datetime.now(timezone.utc),
            is_active=True,
            view_count=0,
        )
        resumes.append(snapshot)
        await self._set_stored_public_resumes(resumes)

        logger.info(f"Published resume '{name}' as share {snapshot.share_id}")
        return snapshot.share_id

    async def get_public_resume(self, share_id: str) -> Optional[PublicResume]:
        """Return an active snapshot, or None if missing or deactivated."""
        resumes = await self._get_stored_public_resumes()
        return next((r for r in resumes if r.share_id == share_id and r.is_active), None)

    async def get_all_public_resumes(self) -> list[PublicResume]:
        """All snapshots, active or not, newest first."""
        resumes = await self._get_stored_public_resumes()
        return sorted(resumes, key=lambda r: r.created_at, reverse=True)

    async def update_public_resume(self, share_id: str, name: str, resume_data: ResumeData) -> PublicResume:
        """
        Replace the name and data of a snapshot, keeping its share id.

        Raises:
            ShareNotFoundError: If no snapshot has the given share id
        """
        resumes = await self._get_stored_public_resumes()
        index = self._find_index(resumes, share_id)
        if index == -1:
            raise ShareNotFoundError(share_id)

        resumes[index] = resumes[index].model_copy(update={
            "name": name,
            "resume_data": resume_data.model_copy(deep=True),
        })
        await self._set_stored_public_resumes(resumes)

        logger.info(f"Updated share {share_id}")
        return resumes[index]

    async def delete_public_resume(self, share_id: str) -> None:
        """Remove a snapshot. Unknown share ids are ignored."""
        resumes = await self._get_stored_public_resumes()
        remaining = [r for r in resumes if r.share_id != share_id]
        if len(remaining) != len(resumes):
            await self._set_stored_public_resumes(remaining)
            logger.info(f"Deleted share {share_id}")

    async def increment_view_count(self, share_id: str) -> None:
        resumes = await self._get_stored_public_resumes()
        index = self._find_index(resumes, share_id)
        if index == -1:
            return

        resumes[index].view_count += 1
        await self._set_stored_public_resumes(resumes)

    async def toggle_public_resume_status(self, share_id: str, is_active: bool) -> PublicResume:
        """
        Activate or deactivate a snapshot.

        Raises:
            ShareNotFoundError: If no snapshot has the given share id
        """
        resumes = await self._get_stored_public_resumes()
        index = self._find_index(resumes, share_id)
        if index == -1:
            raise ShareNotFoundError(share_id)

        resumes[index].is_active = is_active
        await self._set_stored_public_resumes(resumes)

        logger.info(f"Share {share_id} is now {'active' if is_active else 'inactive'}")
        return resumes[index]

    async def view_public_resume(self, share_id: str) -> Optional[PublicResume]:
        """
        Fetch an active snapshot for public display and count the view.

        The returned snapshot carries the view count including this visit.
        """
        resume = await self.get_public_resume(share_id)
        if resume is None:
            return None

        await self.increment_view_count(share_id)
        resume.view_count += 1
        return resume
