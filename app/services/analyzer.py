"""
Rule-based resume analysis service.

Two modes are supported:
- ATS: keyword overlap between the resume and a target job description
- General: structural checks on the resume itself (summary, experience depth,
  education, skills, online presence, quantified results)

Scoring is deterministic. Each call builds a fresh AnalysisResult; nothing
here reads or writes storage.
"""

import math
import re
import logging
from typing import Optional

from app.models.resume import AnalysisResult, ResumeData
from app.services.exceptions import InvalidInputError
from app.services.nlp_utils import extract_keywords, matching_keywords, missing_keywords

logger = logging.getLogger(__name__)


ATS_SCORE_RANGE = (45, 95)
GENERAL_SCORE_RANGE = (35, 95)
GENERAL_BASE_SCORE = 60

MAX_SUGGESTIONS = 6
MAX_KEYWORD_MATCHES = 10
MAX_MISSING_KEYWORDS = 8
MISSING_KEYWORDS_IN_SUGGESTION = 5

# Verbs that count as a strong opening for an experience description
ACTION_VERBS = [
    "achieved", "managed", "developed", "led", "created",
    "implemented", "improved", "increased", "reduced", "streamlined",
]

ATS_INDUSTRY_INSIGHTS = [
    "ATS systems scan for exact keyword matches",
    'Use standard section headings like "Work Experience" and "Education"',
    "Avoid images, graphics, and complex formatting",
    'Include both acronyms and full terms (e.g., "AI" and "Artificial Intelligence")',
]

GENERAL_INDUSTRY_INSIGHTS = [
    "Recruiters spend an average of 6 seconds reviewing each resume",
    "Quantified achievements are 40% more likely to get attention",
    "Tailored resumes have 2x higher callback rates",
    "Professional formatting increases perceived competence by 30%",
]


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return min(high, max(low, value))


class ResumeAnalyzer:
    """
    Heuristic resume scoring engine.

    analyze_ats() scores keyword coverage against a job description.
    analyze_general() scores structural completeness of the resume.
    """

    def __init__(self):
        self.quantifiable_pattern = re.compile(
            r'\d+%|\$\d+|\d+\+|increased|decreased|improved|reduced',
            re.IGNORECASE | re.ASCII
        )
        self.digit_pattern = re.compile(r'\d+', re.ASCII)
        self.action_verb_pattern = re.compile(
            r'^(' + '|'.join(ACTION_VERBS) + r')',
            re.IGNORECASE
        )

    def analyze_ats(self, resume_data: ResumeData, job_description: str) -> AnalysisResult:
        """
        Score how well a resume covers the keywords of a job description.

        Args:
            resume_data: The resume to analyze
            job_description: Target job description text

        Returns:
            AnalysisResult of type "ats"

        Raises:
            InvalidInputError: If the job description is empty
        """
        if not job_description or not job_description.strip():
            raise InvalidInputError(
                "A job description is required for ATS analysis",
                field="jobDescription"
            )

        resume_keywords = extract_keywords(self._get_resume_text(resume_data))
        job_keywords = extract_keywords(job_description)

        matched = matching_keywords(resume_keywords, job_keywords)
        missing = missing_keywords(job_keywords, resume_keywords)[:MAX_MISSING_KEYWORDS]

        score = self._calculate_ats_score(len(matched), len(job_keywords))
        logger.debug(
            f"ATS analysis: {len(matched)}/{len(job_keywords)} job keywords matched, score={score}"
        )

        return AnalysisResult(
            type="ats",
            score=score,
            suggestions=self._generate_ats_suggestions(missing, resume_data),
            keyword_matches=matched[:MAX_KEYWORD_MATCHES],
            missing_keywords=missing,
            industry_insights=list(ATS_INDUSTRY_INSIGHTS),
        )

    def analyze_general(self, resume_data: ResumeData) -> AnalysisResult:
        """Score a resume on structural completeness alone."""
        score = GENERAL_BASE_SCORE
        strengths = []
        weaknesses = []

        info = resume_data.personal_info
        experience = resume_data.experience
        skill_count = len(resume_data.skills)

        # Summary (10 points)
        if len(info.summary) > 100:
            score += 10
            strengths.append("Strong professional summary")
        else:
            weaknesses.append("Missing or weak professional summary")

        # Experience depth (15 points, 8 for a single role)
        if len(experience) >= 2:
            score += 15
            strengths.append("Good work experience history")
        elif len(experience) == 1:
            score += 8
        else:
            weaknesses.append("Limited work experience")

        # Education (10 points)
        if resume_data.education:
            score += 10
            strengths.append("Educational background included")
        else:
            weaknesses.append("No educational information")

        # Skills (10 points, 5 for a moderate list)
        if skill_count >= 8:
            score += 10
            strengths.append("Comprehensive skills section")
        elif skill_count >= 5:
            score += 5
        else:
            weaknesses.append("Limited skills listed")

        # LinkedIn (5 points)
        if info.linkedin:
            score += 5
            strengths.append("Professional online presence")

        # Quantified results (10 points)
        if any(self.quantifiable_pattern.search(exp.description) for exp in experience):
            score += 10
            strengths.append("Quantifiable achievements mentioned")
        else:
            weaknesses.append("Lacks quantifiable results")

        score = _clamp(score, GENERAL_SCORE_RANGE)
        logger.debug(f"General analysis: score={score}, weaknesses={len(weaknesses)}")

        return AnalysisResult(
            type="general",
            score=score,
            suggestions=self._generate_general_suggestions(resume_data),
            strengths=strengths,
            weaknesses=weaknesses,
            industry_insights=list(GENERAL_INDUSTRY_INSIGHTS),
        )

    def _calculate_ats_score(self, match_count: int, job_keyword_count: int) -> int:
        """Keyword coverage as a percentage, rounded half up and clamped."""
        if job_keyword_count == 0:
            return ATS_SCORE_RANGE[0]
        raw = math.floor(match_count / job_keyword_count * 100 + 0.5)
        return _clamp(raw, ATS_SCORE_RANGE)

    def _generate_ats_suggestions(self, missing: list[str], resume: ResumeData) -> list[str]:
        suggestions = []

        if missing:
            shown = ", ".join(missing[:MISSING_KEYWORDS_IN_SUGGESTION])
            suggestions.append(f"Include these relevant keywords: {shown}")

        if not resume.personal_info.summary:
            suggestions.append("Add a professional summary section to highlight your key qualifications")

        if not resume.experience:
            suggestions.append("Add work experience with quantifiable achievements")
        elif not any(self.digit_pattern.search(exp.description) for exp in resume.experience):
            suggestions.append("Include specific numbers and metrics in your experience descriptions")

        if len(resume.skills) < 5:
            suggestions.append("Add more relevant technical and soft skills")

        suggestions.append("Use action verbs to start bullet points (achieved, managed, developed, etc.)")
        suggestions.append("Ensure consistent formatting and remove any typos")

        return suggestions[:MAX_SUGGESTIONS]

    def _generate_general_suggestions(self, resume: ResumeData) -> list[str]:
        suggestions = []
        summary = resume.personal_info.summary
        experience = resume.experience

        if not summary:
            suggestions.append("Add a compelling professional summary that highlights your unique value proposition")
        elif len(summary) < 100:
            suggestions.append("Expand your professional summary to better showcase your expertise")

        if not experience:
            suggestions.append("Add relevant work experience with specific achievements and responsibilities")
        else:
            avg_length = sum(len(exp.description) for exp in experience) / len(experience)
            if avg_length < 150:
                suggestions.append("Provide more detailed descriptions of your accomplishments in each role")

            if not any(self.action_verb_pattern.match(exp.description) for exp in experience):
                suggestions.append("Start experience descriptions with strong action verbs")

        if not resume.education:
            suggestions.append("Include your educational background and relevant certifications")

        if len(resume.skills) < 8:
            suggestions.append("Add more relevant skills, including both technical and soft skills")

        if not resume.personal_info.linkedin:
            suggestions.append("Add your LinkedIn profile to increase professional credibility")

        suggestions.append("Tailor your resume for each job application")
        suggestions.append("Keep your resume to 1-2 pages for optimal readability")

        return suggestions[:MAX_SUGGESTIONS]

    def _get_resume_text(self, resume: ResumeData) -> str:
        """Concatenate the text fields that feed keyword extraction."""
        parts = [resume.personal_info.summary]

        for exp in resume.experience:
            parts.append(f"{exp.position} {exp.company} {exp.description}")

        for edu in resume.education:
            parts.append(f"{edu.degree} {edu.field} {edu.institution}")

        parts.extend(skill.name for skill in resume.skills)

        return " ".join(parts)


# Singleton instance
_resume_analyzer: Optional[ResumeAnalyzer] = None


def get_resume_analyzer() -> ResumeAnalyzer:
    """Get or create the resume analyzer singleton."""
    global _resume_analyzer
    if _resume_analyzer is None:
        _resume_analyzer = ResumeAnalyzer()
    return _resume_analyzer
