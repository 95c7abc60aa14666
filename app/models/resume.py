"""Resume data models matching the frontend structure."""
from datetime import datetime
from typing import List, Optional, Literal
from pydantic import BaseModel, Field, field_validator


class PersonalInfo(BaseModel):
    """Personal information section of the resume."""
    full_name: str = Field("", alias="fullName", description="Full name")
    email: str = Field("", description="Email address")
    phone: str = Field("", description="Phone number")
    location: str = Field("", description="Location (City, State/Country)")
    website: str = Field("", description="Personal website URL")
    linkedin: str = Field("", description="LinkedIn profile URL or username")
    summary: str = Field("", description="Professional summary")

    class Config:
        populate_by_name = True


class Experience(BaseModel):
    """Work experience entry."""
    id: str = Field("", description="Identifier, unique within the experience list")
    company: str = Field("", description="Company name")
    position: str = Field("", description="Job title/position")
    start_date: str = Field("", alias="startDate", description="Start date (e.g., 'Jan 2020')")
    end_date: str = Field("", alias="endDate", description="End date, empty when current")
    current: bool = Field(False, description="Is this the current job?")
    description: str = Field("", description="Free-text responsibilities and achievements")

    class Config:
        populate_by_name = True


class Education(BaseModel):
    """Education entry."""
    id: str = Field("", description="Identifier, unique within the education list")
    institution: str = Field("", description="School/University name")
    degree: str = Field("", description="Degree type (e.g., 'Bachelor of Science')")
    field: str = Field("", description="Field of study")
    start_date: str = Field("", alias="startDate", description="Start date/year")
    end_date: str = Field("", alias="endDate", description="End date/year")
    gpa: Optional[str] = Field(None, description="GPA (optional)")

    class Config:
        populate_by_name = True


class Skill(BaseModel):
    """A single named skill."""
    id: str = Field("", description="Identifier, unique within the skills list")
    name: str = Field(..., description="Skill name")
    category: str = Field("General", description="Skill category name")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        """Trim surrounding whitespace from the skill name."""
        if isinstance(v, str):
            return v.strip()
        return v


class ResumeData(BaseModel):
    """Complete resume data structure matching frontend format."""
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo, alias="personalInfo")
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)

    class Config:
        populate_by_name = True


# Sections of ResumeData that hold editable entries
SectionType = Literal["experience", "education", "skills"]


# ============================================
# Analysis Models
# ============================================


AnalysisType = Literal["ats", "general"]


class AnalysisResult(BaseModel):
    """Result of an ATS or general analysis run. Never persisted."""
    type: AnalysisType
    score: int = Field(..., ge=0, le=100)
    suggestions: List[str] = Field(default_factory=list)
    keyword_matches: Optional[List[str]] = Field(None, alias="keywordMatches")
    missing_keywords: Optional[List[str]] = Field(None, alias="missingKeywords")
    strengths: Optional[List[str]] = None
    weaknesses: Optional[List[str]] = None
    industry_insights: Optional[List[str]] = Field(None, alias="industryInsights")

    class Config:
        populate_by_name = True


class ATSAnalysisRequest(BaseModel):
    """Request model for ATS keyword analysis."""
    resume_data: ResumeData = Field(..., alias="resumeData")
    job_description: str = Field(
        "",
        alias="jobDescription",
        description="Target job description to match against"
    )

    class Config:
        populate_by_name = True


# ============================================
# Storage & Sharing Models
# ============================================


class SavedResume(BaseModel):
    """A named resume draft."""
    id: str
    name: str
    resume_data: ResumeData = Field(..., alias="resumeData")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True


class PublicResume(BaseModel):
    """A read-only public snapshot of a resume."""
    id: str
    share_id: str = Field(..., alias="shareId")
    name: str
    resume_data: ResumeData = Field(..., alias="resumeData")
    created_at: datetime = Field(..., alias="createdAt")
    is_active: bool = Field(True, alias="isActive")
    view_count: int = Field(0, alias="viewCount", ge=0)

    class Config:
        populate_by_name = True


class SaveResumeRequest(BaseModel):
    """Request body for saving a draft or publishing a snapshot."""
    name: str = Field(..., description="Display name")
    resume_data: ResumeData = Field(default_factory=ResumeData, alias="resumeData")

    class Config:
        populate_by_name = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Reject names that are empty after trimming."""
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class ShareResponse(BaseModel):
    """Response for a newly created share."""
    share_id: str = Field(..., alias="shareId")
    share_url: str = Field(..., alias="shareUrl")

    class Config:
        populate_by_name = True


class ShareStatusRequest(BaseModel):
    """Request body for activating or deactivating a share."""
    is_active: bool = Field(..., alias="isActive")

    class Config:
        populate_by_name = True


class HealthResponse(BaseModel):
    """Health check response."""
    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime
    storage_backend: str = Field(alias="storageBackend")

    class Config:
        populate_by_name = True
