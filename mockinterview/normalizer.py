"""
Repairs the model's question list: fills missing ids, restores oral-first
ordering and substitutes a single safe question when nothing usable came
back. Pure post-processing, never raises.
"""

import logging
import re
from collections import Counter
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from .schemas import GeneratedQuestion, QuestionType, Stage

logger = logging.getLogger(__name__)

FALLBACK_QUESTION_TEXT = "Tell me about yourself and your experience relevant to this field."

STAGE_RANK = {
    Stage.ORAL: 0,
    Stage.TECHNICAL_WRITTEN: 1,
}

_ID_NUMBER = re.compile(r"^\D*(\d+)")


def fallback_questions() -> List[GeneratedQuestion]:
    return [
        GeneratedQuestion(
            id="q1",
            text=FALLBACK_QUESTION_TEXT,
            stage=Stage.ORAL,
            type=QuestionType.CONVERSATIONAL,
        )
    ]


def numeric_id_suffix(question_id: str) -> int:
    match = _ID_NUMBER.match(question_id or "")
    return int(match.group(1)) if match else 0


def _coerce(raw: Any, position: int) -> Optional[GeneratedQuestion]:
    if isinstance(raw, GeneratedQuestion):
        data = raw.model_dump()
    elif isinstance(raw, dict):
        data = dict(raw)
    else:
        logger.warning(f"Dropping model question #{position + 1}: not an object ({type(raw).__name__})")
        return None

    for key in ("stage", "type"):
        if isinstance(data.get(key), str):
            data[key] = data[key].strip().lower()

    question_id = data.get("id")
    if isinstance(question_id, int) and not isinstance(question_id, bool):
        question_id = data["id"] = str(question_id)
    if not (isinstance(question_id, str) and question_id.strip()):
        data["id"] = f"gen_q{position + 1}"

    text = data.get("text")
    if not (isinstance(text, str) and text.strip()):
        logger.warning(f"Dropping model question #{position + 1}: no text")
        return None

    # Generation never supplies answers
    data.pop("answer", None)
    try:
        return GeneratedQuestion.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Dropping model question #{position + 1}: {e.error_count()} invalid field(s)")
        return None


def normalize(raw_questions: Optional[Iterable[Any]], request_succeeded: bool) -> List[GeneratedQuestion]:
    """
    Turn raw model output into an ordered question list.

    Args:
        raw_questions: Items from the model's "questions" array
        request_succeeded: False when the model call failed

    Returns:
        Oral questions first, then technical_written, each group ordered by
        the number in its id. Never empty.
    """
    if raw_questions is None or isinstance(raw_questions, (str, bytes, dict)):
        raw_list = []
    else:
        try:
            raw_list = list(raw_questions)
        except TypeError:
            logger.warning(f"Model questions are {type(raw_questions).__name__}, not a list")
            raw_list = []
    if not request_succeeded or not raw_list:
        return fallback_questions()

    questions = [q for q in (_coerce(raw, i) for i, raw in enumerate(raw_list)) if q is not None]
    if not questions:
        logger.warning("No usable questions in model output, using fallback question")
        return fallback_questions()

    duplicates = [qid for qid, count in Counter(q.id for q in questions).items() if count > 1]
    if duplicates:
        # Left as-is: only missing ids are replaced
        logger.warning(f"Model returned duplicate question ids: {duplicates}")

    return sorted(questions, key=lambda q: (STAGE_RANK[q.stage], numeric_id_suffix(q.id)))
