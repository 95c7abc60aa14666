"""Services for the Resume Studio Backend."""
from app.services.analyzer import ResumeAnalyzer, get_resume_analyzer
from app.services.resume_storage import ResumeStorageService
from app.services.sharing import PublicSharingService

__all__ = [
    "ResumeAnalyzer",
    "get_resume_analyzer",
    "ResumeStorageService",
    "PublicSharingService",
]
