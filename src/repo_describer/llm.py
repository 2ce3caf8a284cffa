import logging
import time
from typing import Protocol

from openai import OpenAI

from repo_describer import config, prompts
from repo_describer.errors import ServiceError

logger = logging.getLogger(__name__)


class TextGenerationClient(Protocol):
    def complete(self, prompt: str) -> str: ...


class OpenAIClient:
    """Chat completion client for any OpenAI-compatible endpoint.

    Timeouts and retries are the SDK's concern and come from ``LLMConfig``;
    callers see either the generated text or a ``ServiceError``.
    """

    def __init__(self, llm_config: config.LLMConfig):
        self.model_name = llm_config.model_name
        self._client = OpenAI(
            api_key=llm_config.openai_api_key,
            base_url=llm_config.openai_base_url,
            timeout=llm_config.request_timeout,
            max_retries=llm_config.max_retries,
        )

    def complete(self, prompt: str) -> str:
        t0 = time.monotonic()
        try:
            response = self._client.chat.completions.create(
                model=self.model_name,
                messages=[
                    {"role": "system", "content": prompts.SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except Exception as exc:
            raise ServiceError(f"LLM request failed: {exc}") from exc

        if not response.choices:
            raise ServiceError("LLM returned no choices")
        text = response.choices[0].message.content
        if not text:
            raise ServiceError("LLM returned empty response")

        logger.info(f"Completion from {self.model_name} in {time.monotonic() - t0:.1f}s ({len(text)} chars)")
        return text
