"""
API Routes for Resume Studio Backend.

Provides endpoints for:
- ATS and general resume analysis
- Saving, loading and editing resume drafts
- Publishing and managing public resume snapshots
- Health checks
"""
import asyncio
from datetime import datetime, timezone
from typing import Any
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from app.api.dependencies import (
    get_analyzer,
    get_app_settings,
    get_resume_storage,
    get_sharing_service,
    get_store,
)
from app.config import Settings
from app.models.resume import (
    ATSAnalysisRequest,
    AnalysisResult,
    HealthResponse,
    PublicResume,
    ResumeData,
    SavedResume,
    SaveResumeRequest,
    SectionType,
    ShareResponse,
    ShareStatusRequest,
)
from app.services.analyzer import ResumeAnalyzer
from app.services.editor import add_entry, remove_entry, update_entry
from app.services.exceptions import (
    EntryNotFoundError,
    InvalidInputError,
    ResumeNotFoundError,
    ShareNotFoundError,
)
from app.services.resume_storage import ResumeStorageService
from app.services.sharing import PublicSharingService
from app.services.store import CollectionStore

logger = logging.getLogger(__name__)
router = APIRouter()


async def _simulate_latency(settings: Settings) -> None:
    if settings.analysis_delay_ms > 0:
        await asyncio.sleep(settings.analysis_delay_ms / 1000)


async def _require_resume(storage: ResumeStorageService, resume_id: str) -> SavedResume:
    saved = await storage.get_resume(resume_id)
    if saved is None:
        raise HTTPException(status_code=404, detail=f"Resume '{resume_id}' not found")
    return saved


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(
    settings: Settings = Depends(get_app_settings),
    store: CollectionStore = Depends(get_store),
):
    """
    Health check endpoint.

    Returns the service status, version, and which storage backend is in use.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc),
        storageBackend=store.backend
    )


# ============================================
# Analysis
# ============================================


@router.post("/analyze/ats", response_model=AnalysisResult, tags=["Analysis"])
async def analyze_ats(
    request: ATSAnalysisRequest,
    analyzer: ResumeAnalyzer = Depends(get_analyzer),
    settings: Settings = Depends(get_app_settings),
):
    """
    Score a resume against a job description.

    Request body:
    - resumeData: The resume data matching the frontend format
    - jobDescription: Target job description (required, non-empty)

    Returns the score (45-95), matched and missing keywords, suggestions
    and ATS insights.
    """
    try:
        result = analyzer.analyze_ats(request.resume_data, request.job_description)
    except InvalidInputError as e:
        logger.warning(f"ATS analysis rejected: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    await _simulate_latency(settings)
    return result


@router.post("/analyze/general", response_model=AnalysisResult, tags=["Analysis"])
async def analyze_general(
    resume_data: ResumeData,
    analyzer: ResumeAnalyzer = Depends(get_analyzer),
    settings: Settings = Depends(get_app_settings),
):
    """
    Score a resume on structure and completeness.

    Returns the score (35-95), strengths, weaknesses, suggestions and
    general hiring insights.
    """
    result = analyzer.analyze_general(resume_data)
    await _simulate_latency(settings)
    return result


# ============================================
# Drafts
# ============================================


@router.get("/resumes", response_model=list[SavedResume], tags=["Resumes"])
async def list_resumes(storage: ResumeStorageService = Depends(get_resume_storage)):
    """List saved drafts, most recently updated first."""
    return await storage.get_all_resumes()


@router.post("/resumes", response_model=SavedResume, status_code=201, tags=["Resumes"])
async def save_resume(
    request: SaveResumeRequest,
    storage: ResumeStorageService = Depends(get_resume_storage),
):
    """Save a new named draft."""
    resume_id = await storage.save_resume(request.name, request.resume_data)
    return await _require_resume(storage, resume_id)


@router.get("/resumes/{resume_id}", response_model=SavedResume, tags=["Resumes"])
async def get_resume(
    resume_id: str,
    storage: ResumeStorageService = Depends(get_resume_storage),
):
    """Load a saved draft."""
    return await _require_resume(storage, resume_id)


@router.put("/resumes/{resume_id}", response_model=SavedResume, tags=["Resumes"])
async def update_resume(
    resume_id: str,
    request: SaveResumeRequest,
    storage: ResumeStorageService = Depends(get_resume_storage),
):
    """Replace the name and content of a saved draft."""
    try:
        return await storage.update_resume(resume_id, request.name, request.resume_data)
    except ResumeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/resumes/{resume_id}", status_code=204, tags=["Resumes"])
async def delete_resume(
    resume_id: str,
    storage: ResumeStorageService = Depends(get_resume_storage),
):
    """Delete a saved draft. Deleting an unknown draft is not an error."""
    await storage.delete_resume(resume_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/resumes/{resume_id}/{section}", response_model=SavedResume, status_code=201, tags=["Resumes"])
async def add_resume_entry(
    resume_id: str,
    section: SectionType,
    fields: dict[str, Any] = Body(...),
    storage: ResumeStorageService = Depends(get_resume_storage),
):
    """
    Add an experience, education or skill entry to a draft.

    The entry id is generated by the server.
    """
    saved = await _require_resume(storage, resume_id)
    try:
        resume_data, _ = add_entry(saved.resume_data, section, fields)
    except InvalidInputError as e:
        logger.warning(f"Rejected new {section} entry for {resume_id}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return await storage.update_resume(resume_id, saved.name, resume_data)


@router.patch("/resumes/{resume_id}/{section}/{entry_id}", response_model=SavedResume, tags=["Resumes"])
async def update_resume_entry(
    resume_id: str,
    section: SectionType,
    entry_id: str,
    fields: dict[str, Any] = Body(...),
    storage: ResumeStorageService = Depends(get_resume_storage),
):
    """Change fields of one entry in a draft."""
    saved = await _require_resume(storage, resume_id)
    try:
        resume_data = update_entry(saved.resume_data, section, entry_id, fields)
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInputError as e:
        logger.warning(f"Rejected {section} update for {resume_id}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return await storage.update_resume(resume_id, saved.name, resume_data)


@router.delete("/resumes/{resume_id}/{section}/{entry_id}", response_model=SavedResume, tags=["Resumes"])
async def remove_resume_entry(
    resume_id: str,
    section: SectionType,
    entry_id: str,
    storage: ResumeStorageService = Depends(get_resume_storage),
):
    """Remove one entry from a draft."""
    saved = await _require_resume(storage, resume_id)
    resume_data = remove_entry(saved.resume_data, section, entry_id)
    return await storage.update_resume(resume_id, saved.name, resume_data)


# ============================================
# Public sharing
# ============================================


@router.get("/shares", response_model=list[PublicResume], tags=["Sharing"])
async def list_shares(sharing: PublicSharingService = Depends(get_sharing_service)):
    """List all public snapshots, active or not, newest first."""
    return await sharing.get_all_public_resumes()


@router.post("/shares", response_model=ShareResponse, status_code=201, tags=["Sharing"])
async def create_share(
    request: SaveResumeRequest,
    sharing: PublicSharingService = Depends(get_sharing_service),
):
    """
    Publish a read-only snapshot of a resume.

    Returns the share id and the public URL for it. Later edits to the draft
    do not affect the snapshot.
    """
    share_id = await sharing.create_public_resume(request.name, request.resume_data)
    return ShareResponse(shareId=share_id, shareUrl=sharing.share_url(share_id))


@router.put("/shares/{share_id}", response_model=PublicResume, tags=["Sharing"])
async def update_share(
    share_id: str,
    request: SaveResumeRequest,
    sharing: PublicSharingService = Depends(get_sharing_service),
):
    """Replace the content of a snapshot, keeping its share id."""
    try:
        return await sharing.update_public_resume(share_id, request.name, request.resume_data)
    except ShareNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/shares/{share_id}/status", response_model=PublicResume, tags=["Sharing"])
async def set_share_status(
    share_id: str,
    request: ShareStatusRequest,
    sharing: PublicSharingService = Depends(get_sharing_service),
):
    """Activate or deactivate a snapshot. Inactive snapshots are not publicly visible."""
    try:
        return await sharing.toggle_public_resume_status(share_id, request.is_active)
    except ShareNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/shares/{share_id}", status_code=204, tags=["Sharing"])
async def delete_share(
    share_id: str,
    sharing: PublicSharingService = Depends(get_sharing_service),
):
    """Delete a snapshot permanently."""
    await sharing.delete_public_resume(share_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/public/{share_id}", response_model=PublicResume, tags=["Sharing"])
async def view_public_resume(
    share_id: str,
    sharing: PublicSharingService = Depends(get_sharing_service),
):
    """
    Public view of a shared resume.

    Each successful request counts as one view.
    """
    resume = await sharing.view_public_resume(share_id)
    if resume is None:
        raise HTTPException(status_code=404, detail="Resume not found or no longer available")
    return resume
