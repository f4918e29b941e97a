import asyncio
import json
import logging
import time
from openai import AsyncOpenAI, OpenAIError
from .config import get_settings
from .schemas import ModelRequest

logger = logging.getLogger(__name__)


class ModelInvocationError(Exception):
    """Transport, timeout or quota failure while calling the generative model"""
    pass


async def complete_json(request: ModelRequest) -> dict:
    """
    Send one request to the chat model and return its JSON object reply.

    Malformed JSON comes back as an empty dict, same as an empty reply.
    Raises ModelInvocationError when the call itself fails.
    """
    settings = get_settings()
    if not settings.openai_api_key:
        raise ModelInvocationError("OPENAI_API_KEY is not set. Add it to your .env file.")

    client = AsyncOpenAI(api_key=settings.openai_api_key, timeout=settings.llm_timeout_seconds)
    temperature = request.temperature if request.temperature is not None else settings.llm_temperature

    logger.info(f"[LLM] Sending request to {settings.openai_model} ({len(request.user_prompt)} chars)")
    start_time = time.time()

    try:
        resp = await client.chat.completions.create(
            model=settings.openai_model,
            messages=[
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_prompt},
            ],
            temperature=temperature,
            response_format={"type": "json_object"},
        )
    except OpenAIError as e:
        error_msg = f"OpenAI API error: {type(e).__name__}: {str(e)}"
        logger.error(error_msg)
        raise ModelInvocationError(error_msg) from e
    except asyncio.TimeoutError as e:
        error_msg = f"Timeout waiting for OpenAI API after {settings.llm_timeout_seconds}s"
        logger.error(error_msg)
        raise ModelInvocationError(error_msg) from e

    elapsed = time.time() - start_time
    logger.info(f"[LLM] Response received in {elapsed:.2f}s")

    choices = getattr(resp, "choices", None) or []
    if not choices:
        logger.warning("[LLM] Response contained no choices")
    raw = (choices[0].message.content if choices else None) or "{}"
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"[LLM] Response was not valid JSON: '{raw[:100]}...'")
        parsed = {}
    if not isinstance(parsed, dict):
        logger.warning(f"[LLM] Expected a JSON object, got {type(parsed).__name__}")
        parsed = {}
    return parsed
