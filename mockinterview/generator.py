"""
Interview question generation pipeline

Steps:
1. Source Selector   - pick the primary content source
2. Classifier        - technical vs non-technical role
3. Plan Calculator   - question count and stage/type breakdown
4. Request Builder   - instruction + source content for the model
5. Model call        - one awaited completion, no retry
6. Normalizer        - ids, oral-first ordering, fallback question
"""

import logging

from .classifier import is_technical_role
from .llm import ModelInvocationError, complete_json
from .normalizer import FALLBACK_QUESTION_TEXT, normalize
from .plan import compute_plan
from .prompts import build_request
from .schemas import CandidateContext, GenerationResult, QuestionPlan
from .sources import select_source

logger = logging.getLogger(__name__)


def plan_for_context(ctx: CandidateContext) -> QuestionPlan:
    source = select_source(ctx)
    technical = is_technical_role(ctx.role, ctx.profile_field)
    return compute_plan(
        source,
        technical,
        ctx.interview_duration_minutes,
        has_experience=bool(ctx.candidate_profile.work_experience),
    )


async def generate_interview_questions(ctx: CandidateContext) -> GenerationResult:
    """
    Generate the question set for one interview.

    Model failures never reach the caller: they produce the single fallback
    question instead. Cancellation is not caught.
    """
    plan = plan_for_context(ctx)
    request = build_request(ctx, plan)

    logger.info(
        f"Generating questions for {ctx.interview_duration_minutes} min interview. "
        f"Role: {ctx.role}, Field: {ctx.profile_field}, Source: {plan.primary_source.value}, "
        f"Technical: {plan.is_technical}"
    )

    raw_questions = []
    succeeded = True
    try:
        payload = await complete_json(request)
        raw_questions = payload.get("questions") or []
        if not isinstance(raw_questions, list):
            logger.warning(f"Model 'questions' field is {type(raw_questions).__name__}, not a list")
            raw_questions = []
    except ModelInvocationError as e:
        logger.error(f"Question generation failed, using fallback question: {e}")
        succeeded = False

    if succeeded and not raw_questions:
        logger.error(f"Model did not return any questions for role '{ctx.role}'")

    questions = normalize(raw_questions, succeeded)
    fallback_used = not succeeded or not raw_questions or _is_fallback(questions)
    return GenerationResult(plan=plan, questions=questions, fallback_used=fallback_used)


def _is_fallback(questions) -> bool:
    return len(questions) == 1 and questions[0].id == "q1" and questions[0].text == FALLBACK_QUESTION_TEXT
