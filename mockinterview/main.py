import logging
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from .config import get_settings
from .feedback import FeedbackUnavailable, analyze_interview_feedback
from .generator import generate_interview_questions, plan_for_context
from .llm import ModelInvocationError
from .logging_config import setup_logging
from .resume import extract_resume_sections
from .schemas import (
    CandidateContext,
    FeedbackRequest,
    GenerationResult,
    InterviewFeedback,
    QuestionPlan,
    ResumeSections,
    ResumeSectionsRequest,
)

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Mock Interview Question Service", version="0.1.0")


@app.get("/health")
async def health():
    settings = get_settings()
    return JSONResponse({"status": "ok", "model": settings.openai_model})


@app.post("/question-plan", response_model=QuestionPlan)
async def question_plan(ctx: CandidateContext):
    return plan_for_context(ctx)


@app.post("/generate-questions", response_model=GenerationResult)
async def generate_questions(ctx: CandidateContext):
    result = await generate_interview_questions(ctx)
    if result.fallback_used:
        logger.warning(f"Served fallback question for role '{ctx.role}'")
    return result


@app.post("/extract-resume-sections", response_model=ResumeSections)
async def resume_sections(payload: ResumeSectionsRequest):
    try:
        return await extract_resume_sections(payload.resume_text)
    except ModelInvocationError as exc:
        raise HTTPException(status_code=502, detail=f"Could not extract resume sections: {exc}")


@app.post("/analyze-feedback", response_model=InterviewFeedback)
async def analyze_feedback(payload: FeedbackRequest):
    if not payload.questions and not (payload.interview_transcript or "").strip():
        raise HTTPException(status_code=400, detail="Provide questions or an interview transcript.")
    try:
        return await analyze_interview_feedback(payload)
    except (ModelInvocationError, FeedbackUnavailable) as exc:
        raise HTTPException(status_code=502, detail=str(exc))
