import logging
import uuid
from typing import List, Type, TypeVar
from pydantic import BaseModel, ValidationError
from .config import get_settings
from .llm import complete_json
from .schemas import ExperienceItem, ModelRequest, ProjectItem, ResumeSections

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

RESUME_SECTIONS_PROMPT = (
    "You are an expert resume parser. Extract the Work Experience and Projects sections from the resume text. "
    "Return JSON with keys: "
    "experiences (list of objects with jobTitle, companyName, startDate, endDate, description), "
    "projects (list of objects with title, description, technologiesUsed (list of strings), projectUrl). "
    "Dates use YYYY-MM. If only a year is given, use 01 for a start date and 12 for an end date "
    "(\"2018-2019\" becomes 2018-01 to 2019-12). Omit endDate when the role is current "
    "(\"Present\", \"Current\"). "
    "Combine bullet points into a single description string. "
    "Only extract what is present in the text; if a section is missing return an empty list. "
    "Omit optional fields that are not found."
)


def _parse_items(raw_items, model: Type[T], label: str) -> List[T]:
    items: List[T] = []
    if raw_items is None:
        return items
    if not isinstance(raw_items, list):
        logger.warning(f"Resume '{label}' section is {type(raw_items).__name__}, not a list")
        return items
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        data = dict(raw)
        if not data.get("id"):
            data["id"] = str(uuid.uuid4())
        try:
            items.append(model.model_validate(data))
        except ValidationError as e:
            logger.warning(f"Skipping {label} item: {e.error_count()} invalid field(s)")
    return items


async def extract_resume_sections(resume_text: str) -> ResumeSections:
    """Structure raw resume text into experience and project items."""
    if not resume_text or not resume_text.strip():
        return ResumeSections()

    settings = get_settings()
    # Clip overly long resumes
    trimmed = resume_text[:settings.resume_char_limit]
    parsed = await complete_json(
        ModelRequest(
            system_prompt=RESUME_SECTIONS_PROMPT,
            user_prompt=trimmed,
            response_schema={"experiences": [], "projects": []},
            temperature=0.2,
        )
    )
    if not parsed:
        logger.error(f"AI failed to extract resume sections. Input text was: '{resume_text[:100]}...'")
        return ResumeSections()

    return ResumeSections(
        experiences=_parse_items(parsed.get("experiences"), ExperienceItem, "experience"),
        projects=_parse_items(parsed.get("projects"), ProjectItem, "project"),
    )
