import json
import logging
from typing import List
from pydantic import ValidationError
from .llm import complete_json
from .schemas import FeedbackRequest, GeneratedQuestion, InterviewFeedback, ModelRequest, Stage

logger = logging.getLogger(__name__)


class FeedbackUnavailable(Exception):
    """The model produced no usable feedback for the interview"""
    pass


FEEDBACK_SCHEMA_HINT = {
    "overallScore": "integer 0-100, omit if it cannot be assigned confidently",
    "overallFeedback": "string",
    "strengthsSummary": "string",
    "weaknessesSummary": "string",
    "areasForImprovement": "string",
    "detailedQuestionFeedback": [
        {
            "questionId": "string",
            "questionText": "string",
            "userAnswer": "string",
            "idealAnswer": "string",
            "refinementSuggestions": "string",
            "score": "integer 0-10",
        }
    ],
}

FEEDBACK_PROMPT = (
    "You are an interview performance analyzer. "
    "Analyze the interview transcript, the job description and the candidate profile, "
    "then give detailed, constructive feedback: an overall score from 0 to 100 if you can assign one confidently, "
    "overall impressions, what the candidate did well, where they struggled or missed opportunities, "
    "and specific, actionable areas for improvement. "
    "When individual questions are listed, add one detailedQuestionFeedback entry per question with an ideal "
    "answer, refinement suggestions and a 0-10 score. "
    "Focus on helping the candidate learn and improve. "
    "Respond ONLY in JSON with keys: " + json.dumps(FEEDBACK_SCHEMA_HINT)
)


def build_transcript(questions: List[GeneratedQuestion]) -> str:
    """Interviewer/candidate transcript of an answered question list."""
    turns = []
    for q in questions:
        answer = (q.answer or "").strip()
        if not answer:
            answer = "[No verbal answer recorded]" if q.stage == Stage.ORAL else "[No answer provided]"
        turns.append(f"Interviewer ({q.id}, {q.stage.value}): {q.text}\nYou: {answer}")
    return "\n\n".join(turns)


async def analyze_interview_feedback(request: FeedbackRequest) -> InterviewFeedback:
    """
    Score a finished interview with the model.

    Raises ValueError when there is nothing to analyze, ModelInvocationError
    when the model call fails and FeedbackUnavailable when the reply is unusable.
    """
    transcript = (request.interview_transcript or "").strip() or build_transcript(request.questions)
    if not transcript:
        raise ValueError("Either questions or an interview transcript is required.")

    user_content = (
        f"Job description:\n{request.job_description or 'Not provided'}\n\n"
        f"Candidate profile:\n{request.candidate_profile or 'Not provided'}\n\n"
        f"Interview transcript:\n{transcript}\n\n"
        f"Expected answer guidelines (if available):\n{request.expected_answers or 'None'}\n\n"
        "Return JSON only."
    )
    parsed = await complete_json(
        ModelRequest(
            system_prompt=FEEDBACK_PROMPT,
            user_prompt=user_content,
            response_schema=FEEDBACK_SCHEMA_HINT,
            temperature=0.3,
        )
    )
    if not parsed:
        raise FeedbackUnavailable("AI failed to generate feedback.")

    try:
        feedback = InterviewFeedback.model_validate(parsed)
    except ValidationError as e:
        logger.error(f"Feedback response did not match schema: {e.error_count()} error(s)")
        raise FeedbackUnavailable("AI returned feedback in an unexpected format.") from e

    logger.info(
        f"Feedback generated: score={feedback.overall_score}, "
        f"{len(feedback.detailed_question_feedback)} question item(s)"
    )
    return feedback
