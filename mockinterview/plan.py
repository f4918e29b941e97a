"""
Question plan calculator.

Turns (primary source, technicality, duration) into a target question count
and an ordered stage/type breakdown. Deterministic, no LLM. Every count is a
range: the model picks a number inside it and that is acceptable.
"""

import logging
from typing import Dict, List, Tuple

from .schemas import CountRange, PrimarySource, QuestionPlan, QuestionType, Stage, StageTypeSlot

log = logging.getLogger(__name__)


# ─── Tables ────────────────────────────────────────────────────────────────────

TOTAL_BY_DURATION: Dict[int, Tuple[int, int]] = {
    15: (6, 7),
    30: (10, 12),
    45: (15, 16),
}

SOURCE_TAGS: Dict[PrimarySource, QuestionType] = {
    PrimarySource.JOB_DESCRIPTION: QuestionType.JD_BASED,
    PrimarySource.RESUME_TEXT: QuestionType.RESUME_BASED,
    PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS: QuestionType.STRUCTURED_EXP_BASED,
    PrimarySource.GENERAL_PROFILE: QuestionType.PROFILE_BASED,
}

# Technical roles with a job description or resume: percent of the total per slot
DOCUMENT_SHARES = {
    "technical_oral": 45,
    "behavioral_oral": 25,
    "technical_written": 30,
}

# Technical roles with only structured history or a bare profile:
# duration -> (technical oral, non-technical oral, technical written)
PROFILE_COUNTS: Dict[int, Tuple[Tuple[int, int], Tuple[int, int], Tuple[int, int]]] = {
    15: ((2, 3), (2, 2), (2, 2)),
    30: ((4, 5), (2, 3), (3, 4)),
    45: ((6, 7), (4, 5), (4, 5)),
}

LAST_RESORT_ORAL = [QuestionType.CONVERSATIONAL, QuestionType.BEHAVIORAL]

SOURCE_LABELS = {
    PrimarySource.JOB_DESCRIPTION: "the job description",
    PrimarySource.RESUME_TEXT: "the resume",
    PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS: "the candidate's work experience and projects",
    PrimarySource.GENERAL_PROFILE: "the candidate's profile field, role, skills and education",
}


def _percent_of(count: int, percent: int) -> int:
    # Rounds half up
    return (count * percent + 50) // 100


def _share(total: CountRange, percent: int) -> CountRange:
    return CountRange(min=_percent_of(total.min, percent), max=_percent_of(total.max, percent))


def _source_tag(source: PrimarySource, has_experience: bool) -> QuestionType:
    if source == PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS and not has_experience:
        return QuestionType.STRUCTURED_PROJ_BASED
    return SOURCE_TAGS[source]


# ─── Branches ──────────────────────────────────────────────────────────────────

def _non_technical_slots(source: PrimarySource, tag: QuestionType, total: CountRange) -> List[StageTypeSlot]:
    return [
        StageTypeSlot(
            stage=Stage.ORAL,
            type=tag,
            count=total,
            focus=(
                f"Role-relevant questions grounded in {SOURCE_LABELS[source]}: situational, "
                "behavioral and motivation questions a hiring manager would ask."
            ),
            fallback_types=list(LAST_RESORT_ORAL),
        )
    ]


def _document_slots(source: PrimarySource, tag: QuestionType, total: CountRange) -> List[StageTypeSlot]:
    label = SOURCE_LABELS[source]
    return [
        StageTypeSlot(
            stage=Stage.ORAL,
            type=tag,
            count=_share(total, DOCUMENT_SHARES["technical_oral"]),
            focus=f"Deep, domain-specific conceptual questions drawn from {label}.",
        ),
        StageTypeSlot(
            stage=Stage.ORAL,
            type=tag,
            count=_share(total, DOCUMENT_SHARES["behavioral_oral"]),
            focus=f"Behavioral and collaboration questions tied to situations in {label}.",
        ),
        StageTypeSlot(
            stage=Stage.TECHNICAL_WRITTEN,
            type=tag,
            count=_share(total, DOCUMENT_SHARES["technical_written"]),
            focus=f"Coding or system-design problems with concrete problem statements based on {label}.",
        ),
    ]


def _profile_slots(
    source: PrimarySource,
    tag: QuestionType,
    duration_minutes: int,
) -> List[StageTypeSlot]:
    tech_oral, soft_oral, written = (CountRange(min=lo, max=hi) for lo, hi in PROFILE_COUNTS[duration_minutes])
    label = SOURCE_LABELS[source]

    if source == PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS:
        return [
            StageTypeSlot(
                stage=Stage.ORAL,
                type=tag,
                count=tech_oral,
                focus=f"Technical deep-dives into specific roles, systems and decisions from {label}.",
                fallback_types=[QuestionType.TECHNICAL],
            ),
            StageTypeSlot(
                stage=Stage.ORAL,
                type=tag,
                count=soft_oral,
                focus=f"Behavioral and teamwork questions about situations from {label}.",
                fallback_types=list(LAST_RESORT_ORAL),
            ),
            StageTypeSlot(
                stage=Stage.TECHNICAL_WRITTEN,
                type=tag,
                count=written,
                focus=f"Coding or design problems modelled on work described in {label}.",
                fallback_types=[QuestionType.CODING],
            ),
        ]

    # Bare profile: nothing specific to anchor technical questions to
    return [
        StageTypeSlot(
            stage=Stage.ORAL,
            type=QuestionType.TECHNICAL,
            count=tech_oral,
            focus=f"Core technical concepts expected of the role, informed by {label}.",
        ),
        StageTypeSlot(
            stage=Stage.ORAL,
            type=tag,
            count=soft_oral,
            focus=f"Motivation, behavioral and background questions drawn from {label}.",
            fallback_types=list(LAST_RESORT_ORAL),
        ),
        StageTypeSlot(
            stage=Stage.TECHNICAL_WRITTEN,
            type=QuestionType.CODING,
            count=written,
            focus="General coding problems typical for the role and its key skills.",
            fallback_types=[QuestionType.TECHNICAL],
        ),
    ]


# ─── Main entry ────────────────────────────────────────────────────────────────

def compute_plan(
    source: PrimarySource,
    is_technical: bool,
    duration_minutes: int,
    has_experience: bool = True,
) -> QuestionPlan:
    """
    Build the question plan for one interview.

    Args:
        source: Primary source chosen by the source selector
        is_technical: Result of the technical-role heuristic
        duration_minutes: 15, 30 or 45
        has_experience: For the structured source, whether work experience
            (rather than only projects) is available to emphasise

    Returns:
        QuestionPlan with all oral slots listed before technical_written ones
    """
    if duration_minutes not in TOTAL_BY_DURATION:
        raise ValueError(f"Unsupported interview duration: {duration_minutes} minutes")

    low, high = TOTAL_BY_DURATION[duration_minutes]
    total = CountRange(min=low, max=high)
    tag = _source_tag(source, has_experience)

    if not is_technical:
        slots = _non_technical_slots(source, tag, total)
    elif source in (PrimarySource.JOB_DESCRIPTION, PrimarySource.RESUME_TEXT):
        slots = _document_slots(source, tag, total)
    else:
        slots = _profile_slots(source, tag, duration_minutes)

    slots.sort(key=lambda slot: slot.stage != Stage.ORAL)

    log.info(
        f"[PLAN] source={source.value} technical={is_technical} duration={duration_minutes} "
        f"total={total} slots={[(s.stage.value, s.type.value, str(s.count)) for s in slots]}"
    )
    return QuestionPlan(
        primary_source=source,
        is_technical=is_technical,
        duration_minutes=duration_minutes,
        total_questions=total,
        stage_type_breakdown=slots,
    )
