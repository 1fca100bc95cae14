"""
OpenAI Service - LLM implementation using OpenAI API.

Provides the advisory assessment review in JSON Schema mode.
"""
from typing import Dict, Any, Optional
import json
import logging

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState
from core.llm.interfaces import LLMProvider
from core.llm.schema_models import AssessmentReview, ASSESSMENT_REVIEW_SCHEMA
from core.llm.system_prompts import (
    ASSESSMENT_REVIEW_SYSTEM_PROMPT,
    assessment_review_user_message,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _llm_retry(max_attempts: int = 3, **kwargs):
    """Return a tenacity @retry decorator for LLM API calls."""
    return retry(
        retry=retry_if_exception_type((
            openai.RateLimitError,
            openai.APITimeoutError,
            openai.APIConnectionError,
            openai.InternalServerError,
        )),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
        **kwargs,
    )


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Works with any OpenAI-compatible endpoint (set ``base_url`` for Ollama
    or a proxy). Every request carries ``timeout_seconds``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.0,
        timeout_seconds: float = 30.0,
        client: Optional[OpenAI] = None
    ):
        if client is not None:
            self.client = client
        else:
            client_kwargs: Dict[str, Any] = {'timeout': timeout_seconds, 'max_retries': 0}
            if api_key:
                client_kwargs['api_key'] = api_key
            if base_url:
                client_kwargs['base_url'] = base_url
            self.client = OpenAI(**client_kwargs)

        self.model = model
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds

    @_llm_retry()
    def review_assessment(self, content: str, role_type: str) -> Dict[str, Any]:
        messages = [
            {"role": "system", "content": ASSESSMENT_REVIEW_SYSTEM_PROMPT},
            {"role": "user", "content": assessment_review_user_message(content, role_type)},
        ]

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            timeout=self.timeout_seconds,
            response_format={
                "type": "json_schema",
                "json_schema": ASSESSMENT_REVIEW_SCHEMA,
            },
        )

        try:
            raw = response.choices[0].message.content
            review = AssessmentReview.model_validate(json.loads(raw))
        except (json.JSONDecodeError, IndexError, AttributeError, TypeError) as e:
            logger.error(f"Failed to parse assessment review response: {e}")
            raise

        logger.info(f"Assessment review ({self.model}): role_fit={review.role_fit}")
        logger.debug(f"Review reasoning: {review.thought_process}")

        data = review.model_dump()
        data['model'] = self.model
        return data
