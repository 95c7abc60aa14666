"""Data models for the Resume Studio Backend."""
from app.models.resume import (
    PersonalInfo,
    Experience,
    Education,
    Skill,
    ResumeData,
    SectionType,
    AnalysisResult,
    ATSAnalysisRequest,
    SavedResume,
    PublicResume,
    SaveResumeRequest,
    ShareResponse,
    ShareStatusRequest,
    HealthResponse,
)

__all__ = [
    "PersonalInfo",
    "Experience",
    "Education",
    "Skill",
    "ResumeData",
    "SectionType",
    "AnalysisResult",
    "ATSAnalysisRequest",
    "SavedResume",
    "PublicResume",
    "SaveResumeRequest",
    "ShareResponse",
    "ShareStatusRequest",
    "HealthResponse",
]
