"""
OpenAI provider implementation.
"""
import logging
from typing import Optional, Dict
from openai import OpenAI, APIError

from mockprep.core import config
from mockprep.llm.provider import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """
    OpenAI provider using the official OpenAI SDK.

    The SDK retries connection errors, 408/409/429 and 5xx responses with
    exponential backoff up to `max_retries` times; every request is bounded
    by `timeout` seconds.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ):
        self.api_key = api_key or config.OPENAI_API_KEY
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not configured")
        self.client = OpenAI(
            api_key=self.api_key,
            timeout=timeout if timeout is not None else config.AI_TIMEOUT_SECONDS,
            max_retries=max_retries if max_retries is not None else config.AI_MAX_RETRIES,
        )
        logger.info("OpenAI provider initialized")

    def chat(
        self,
        messages: list[Dict[str, str]],
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate a chat completion."""
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens or 4000,
                **kwargs
            )
        except APIError as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            raise

        usage = response.usage
        return LLMResponse(
            content=response.choices[0].message.content or "",
            tokens_in=usage.prompt_tokens if usage else 0,
            tokens_out=usage.completion_tokens if usage else 0,
            model=model,
            metadata={
                "finish_reason": response.choices[0].finish_reason,
            }
        )
