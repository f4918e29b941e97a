from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase keys, serialises camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PrimarySource(str, Enum):
    JOB_DESCRIPTION = "job_description"
    RESUME_TEXT = "resume_text"
    STRUCTURED_EXPERIENCE_OR_PROJECTS = "structured_experience_or_projects"
    GENERAL_PROFILE = "general_profile"


class Stage(str, Enum):
    ORAL = "oral"
    TECHNICAL_WRITTEN = "technical_written"


class QuestionType(str, Enum):
    BEHAVIORAL = "behavioral"
    TECHNICAL = "technical"
    CODING = "coding"
    CONVERSATIONAL = "conversational"
    RESUME_BASED = "resume_based"
    JD_BASED = "jd_based"
    PROFILE_BASED = "profile_based"
    STRUCTURED_EXP_BASED = "structured_exp_based"
    STRUCTURED_PROJ_BASED = "structured_proj_based"


# ─── Candidate profile ─────────────────────────────────────────────────────────

class ExperienceItem(CamelModel):
    id: str
    job_title: str
    company_name: str
    start_date: str  # YYYY-MM
    end_date: Optional[str] = None  # YYYY-MM or "Present"
    description: Optional[str] = None


class ProjectItem(CamelModel):
    id: str
    title: str
    description: str
    technologies_used: Optional[List[str]] = None
    project_url: Optional[str] = None


class EducationItem(CamelModel):
    id: str
    degree: str
    institution: str
    year_of_completion: str
    details: Optional[str] = None


class CandidateProfile(CamelModel):
    role: Optional[str] = None
    profile_field: Optional[str] = None
    key_skills: List[str] = []
    work_experience: List[ExperienceItem] = []
    projects: List[ProjectItem] = []
    education_history: List[EducationItem] = []
    accomplishments: Optional[str] = None


class CandidateContext(CamelModel):
    """Everything known about the candidate for one question-generation request."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    profile_field: str
    role: str
    interview_duration_minutes: Literal[15, 30, 45]
    job_description: Optional[str] = None
    resume_raw_text: Optional[str] = None
    candidate_profile: CandidateProfile = Field(default_factory=CandidateProfile)

    @field_validator("interview_duration_minutes", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> Any:
        # The start page submits the duration as "15" / "30" / "45"
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return value


# ─── Plan ──────────────────────────────────────────────────────────────────────

class CountRange(CamelModel):
    min: int
    max: int

    def __str__(self) -> str:
        return str(self.min) if self.min == self.max else f"{self.min}-{self.max}"


class StageTypeSlot(CamelModel):
    stage: Stage
    type: QuestionType
    count: CountRange
    focus: str
    fallback_types: List[QuestionType] = []


class QuestionPlan(CamelModel):
    primary_source: PrimarySource
    is_technical: bool
    duration_minutes: int
    total_questions: CountRange
    stage_type_breakdown: List[StageTypeSlot]


class ModelRequest(BaseModel):
    system_prompt: str
    user_prompt: str
    response_schema: Dict[str, Any]
    temperature: Optional[float] = None


# ─── Questions ─────────────────────────────────────────────────────────────────

class GeneratedQuestion(CamelModel):
    id: str
    text: str
    stage: Stage
    type: QuestionType
    answer: Optional[str] = None


class GenerationResult(CamelModel):
    plan: QuestionPlan
    questions: List[GeneratedQuestion]
    fallback_used: bool = False


# ─── Feedback ──────────────────────────────────────────────────────────────────

class FeedbackRequest(CamelModel):
    job_description: Optional[str] = None
    candidate_profile: Optional[str] = None
    questions: List[GeneratedQuestion] = []
    interview_transcript: Optional[str] = None
    expected_answers: Optional[str] = None


class QuestionFeedback(CamelModel):
    question_id: str
    question_text: str
    user_answer: Optional[str] = None
    ideal_answer: str
    refinement_suggestions: str
    score: int = Field(..., ge=0, le=10)


class InterviewFeedback(CamelModel):
    overall_score: Optional[int] = Field(None, ge=0, le=100)
    overall_feedback: str
    strengths_summary: str
    weaknesses_summary: str
    areas_for_improvement: str
    detailed_question_feedback: List[QuestionFeedback] = []


# ─── Resume ────────────────────────────────────────────────────────────────────

class ResumeSectionsRequest(CamelModel):
    resume_text: str


class ResumeSections(CamelModel):
    experiences: List[ExperienceItem] = []
    projects: List[ProjectItem] = []
