"""
Projects a CandidateContext and its QuestionPlan into the model request.

No decisions are made here beyond layout: the plan decides what to ask,
this module only writes it down for the model.
"""

import json
from typing import List, Optional

from .schemas import (
    CandidateContext,
    ModelRequest,
    PrimarySource,
    QuestionPlan,
    QuestionType,
    Stage,
)


QUESTIONS_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "questions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Unique id such as q1, q2, q3"},
                    "text": {"type": "string"},
                    "stage": {"type": "string", "enum": [s.value for s in Stage]},
                    "type": {"type": "string", "enum": [t.value for t in QuestionType]},
                },
                "required": ["id", "text", "stage", "type"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["questions"],
}

SYSTEM_PROMPT = (
    "You are an expert interview question generator for mock job interviews. "
    "Write high-quality questions tailored to the candidate material you are given, including questions "
    "frequently asked for the role. "
    "Stages: 'oral' questions are spoken by the interviewer and answered verbally, so phrase them "
    "conversationally and keep them open-ended; 'technical_written' questions are answered in writing or code. "
    "Rules: every question has a globally unique id (q1, q2, q3, ...); never include an answer field; "
    "list all 'oral' questions before any 'technical_written' question; "
    "a written coding question must contain a concrete, self-contained problem statement tied to the primary "
    "source material. "
    "Respond ONLY with a JSON object matching this schema: "
    + json.dumps(QUESTIONS_RESPONSE_SCHEMA)
)

SECTION_TITLES = {
    PrimarySource.JOB_DESCRIPTION: "Job description",
    PrimarySource.RESUME_TEXT: "Resume",
    PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS: "Work experience and projects",
    PrimarySource.GENERAL_PROFILE: "Candidate profile",
}


# ─── Formatting helpers ────────────────────────────────────────────────────────

def _format_experience(ctx: CandidateContext) -> str:
    lines = []
    for item in ctx.candidate_profile.work_experience:
        period = f"{item.start_date} - {item.end_date or 'Present'}"
        lines.append(f"- {item.job_title} at {item.company_name} ({period})")
        if item.description:
            lines.append(f"  {item.description}")
    return "\n".join(lines)


def _format_projects(ctx: CandidateContext) -> str:
    lines = []
    for item in ctx.candidate_profile.projects:
        lines.append(f"- {item.title}: {item.description}")
        if item.technologies_used:
            lines.append(f"  Technologies: {', '.join(item.technologies_used)}")
        if item.project_url:
            lines.append(f"  URL: {item.project_url}")
    return "\n".join(lines)


def _format_education(ctx: CandidateContext) -> str:
    lines = []
    for item in ctx.candidate_profile.education_history:
        line = f"- {item.degree}, {item.institution} ({item.year_of_completion})"
        if item.details:
            line += f": {item.details}"
        lines.append(line)
    return "\n".join(lines)


def _general_profile(ctx: CandidateContext) -> str:
    profile = ctx.candidate_profile
    parts = [
        f"Profile field: {ctx.profile_field or profile.profile_field or 'Not specified'}",
        f"Role: {ctx.role or profile.role or 'Not specified'}",
    ]
    if profile.key_skills:
        parts.append(f"Key skills: {', '.join(profile.key_skills)}")
    education = _format_education(ctx)
    if education:
        parts.append(f"Education:\n{education}")
    if profile.accomplishments:
        parts.append(f"Accomplishments: {profile.accomplishments}")
    return "\n".join(parts)


def _structured_history(ctx: CandidateContext) -> str:
    # Experience first: it carries the emphasis when both are present
    parts = []
    experience = _format_experience(ctx)
    if experience:
        parts.append(f"Work experience:\n{experience}")
    projects = _format_projects(ctx)
    if projects:
        parts.append(f"Projects:\n{projects}")
    return "\n".join(parts)


def primary_content(ctx: CandidateContext, source: PrimarySource) -> str:
    if source == PrimarySource.JOB_DESCRIPTION:
        return ctx.job_description or ""
    if source == PrimarySource.RESUME_TEXT:
        return ctx.resume_raw_text or ""
    if source == PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS:
        return _structured_history(ctx)
    return _general_profile(ctx)


def secondary_content(ctx: CandidateContext, source: PrimarySource) -> Optional[str]:
    """Profile fields not already used as the primary source."""
    if source == PrimarySource.GENERAL_PROFILE:
        return None
    parts = [_general_profile(ctx)]
    if source != PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS:
        history = _structured_history(ctx)
        if history:
            parts.append(history)
    return "\n".join(parts)


def format_breakdown(plan: QuestionPlan) -> str:
    lines: List[str] = []
    for index, slot in enumerate(plan.stage_type_breakdown, start=1):
        line = f"{index}. {slot.count} question(s), stage='{slot.stage.value}', type='{slot.type.value}': {slot.focus}"
        if slot.fallback_types:
            fallbacks = ", ".join(f"'{t.value}'" for t in slot.fallback_types)
            line += f" Use type {fallbacks} only if the material offers nothing more specific."
        lines.append(line)
    return "\n".join(lines)


# ─── Main entry ────────────────────────────────────────────────────────────────

def build_request(ctx: CandidateContext, plan: QuestionPlan, temperature: Optional[float] = None) -> ModelRequest:
    source = plan.primary_source
    kind = "technical" if plan.is_technical else "non-technical"
    secondary = secondary_content(ctx, source)

    user_prompt = (
        f"Candidate profile field: {ctx.profile_field}\n"
        f"Candidate role: {ctx.role} ({kind} role)\n"
        f"Interview duration: {plan.duration_minutes} minutes\n"
        f"Total questions: {plan.total_questions}\n\n"
        f"Question distribution (guidance, in this order):\n{format_breakdown(plan)}\n\n"
        f"PRIMARY SOURCE - {SECTION_TITLES[source]} (base the questions on this):\n"
        f"---\n{primary_content(ctx, source)}\n---\n\n"
        f"Secondary context (minor enrichment only):\n{secondary or 'None'}\n\n"
        "Return JSON only."
    )
    return ModelRequest(
        system_prompt=SYSTEM_PROMPT,
        user_prompt=user_prompt,
        response_schema=QUESTIONS_RESPONSE_SCHEMA,
        temperature=temperature,
    )
