from typing import Callable, List, Optional, Tuple

from .schemas import CandidateContext, PrimarySource


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _has_job_description(ctx: CandidateContext) -> bool:
    return _has_text(ctx.job_description)


def _has_resume_text(ctx: CandidateContext) -> bool:
    return _has_text(ctx.resume_raw_text)


def _has_structured_history(ctx: CandidateContext) -> bool:
    profile = ctx.candidate_profile
    return bool(profile.work_experience or profile.projects)


# Checked top to bottom; the first predicate that holds decides the source.
SOURCE_PRIORITY: List[Tuple[PrimarySource, Callable[[CandidateContext], bool]]] = [
    (PrimarySource.JOB_DESCRIPTION, _has_job_description),
    (PrimarySource.RESUME_TEXT, _has_resume_text),
    (PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS, _has_structured_history),
    (PrimarySource.GENERAL_PROFILE, lambda ctx: True),
]


def select_source(ctx: CandidateContext) -> PrimarySource:
    """Pick the single content source that drives question generation."""
    for source, applies in SOURCE_PRIORITY:
        if applies(ctx):
            return source
    # Unreachable: general_profile always applies
    return PrimarySource.GENERAL_PROFILE
