import os
from functools import lru_cache
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.4
    llm_timeout_seconds: float = 30.0
    resume_char_limit: int = 12000
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        llm_temperature=float(os.getenv("LLM_TEMPERATURE", "0.4")),
        llm_timeout_seconds=float(os.getenv("LLM_TIMEOUT_SECONDS", "30")),
        resume_char_limit=int(os.getenv("RESUME_CHAR_LIMIT", "12000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
