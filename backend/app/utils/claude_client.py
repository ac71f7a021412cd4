"""
Claude API Client
The single gateway from ScaffoldAI's agents to the Anthropic Messages API.

Transient failures (overload, rate limiting, 5xx, network errors) are retried
with exponential backoff and jitter. Everything that still fails surfaces as
AIServiceError, or AIRateLimitError when Anthropic kept answering 429.
"""

from anthropic import AsyncAnthropic, APIStatusError, APIConnectionError, APITimeoutError
from typing import Optional, Dict, List, Any
import asyncio
import random
import time
import httpx
from app.core.config import settings
from app.core.exceptions import AIServiceError, AIRateLimitError
from app.core.logging_config import logger

RETRYABLE_ERROR_TYPES = {"overloaded_error", "rate_limit_error", "api_error"}
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 529}
NETWORK_ERRORS = (APIConnectionError, APITimeoutError, httpx.TransportError)


def is_retryable(error: Exception) -> bool:
    """Network failures always retry; API errors retry on overload, rate limit or 5xx"""
    if isinstance(error, NETWORK_ERRORS):
        return True
    if isinstance(error, APIStatusError):
        body = error.body if isinstance(error.body, dict) else {}
        error_type = (body.get("error") or {}).get("type", "")
        return error_type in RETRYABLE_ERROR_TYPES or error.status_code in RETRYABLE_STATUS_CODES
    return False


def backoff_delay(attempt: int) -> float:
    """Exponential delay for a 0-based attempt, capped, plus up to 25% jitter"""
    delay = min(settings.CLAUDE_RETRY_BASE_DELAY * (2 ** attempt), settings.CLAUDE_RETRY_MAX_DELAY)
    return delay + delay * random.uniform(0, 0.25)


class ClaudeClient:
    """Claude API client wrapper used by the ideation and coding agents"""

    def __init__(self):
        self._client: Optional[AsyncAnthropic] = None
        self.models = {
            "haiku": settings.CLAUDE_HAIKU_MODEL,
            "sonnet": settings.CLAUDE_SONNET_MODEL,
        }

    def _build_client(self) -> AsyncAnthropic:
        if not settings.AI_ENABLED:
            raise AIServiceError(
                "ANTHROPIC_API_KEY is not configured. Add it to the .env file to enable AI features"
            )

        timeout = float(settings.CLAUDE_REQUEST_TIMEOUT)
        options: Dict[str, Any] = {
            "api_key": settings.ANTHROPIC_API_KEY,
            "timeout": httpx.Timeout(timeout, connect=float(settings.CLAUDE_CONNECT_TIMEOUT)),
            # Retries are ours so they show up in the logs
            "max_retries": 0,
        }
        base_url = (settings.ANTHROPIC_BASE_URL or "").strip()
        if base_url:
            options["base_url"] = base_url
            logger.info(f"[Claude] Using custom API base URL: {base_url}")

        logger.info(f"[Claude] Client initialized: timeout={timeout}s, models={self.models}")
        return AsyncAnthropic(**options)

    @property
    def client(self) -> AsyncAnthropic:
        """SDK client, created on first use so a missing key only fails AI calls"""
        if self._client is None:
            self._client = self._build_client()
        return self._client

    @staticmethod
    def _to_result(response, model_name: str) -> Dict[str, Any]:
        text = "".join(
            block.text for block in response.content or [] if getattr(block, "type", "text") == "text"
        )
        usage = response.usage
        return {
            "content": text,
            "model": model_name,
            "input_tokens": usage.input_tokens,
            "output_tokens": usage.output_tokens,
            "total_tokens": usage.input_tokens + usage.output_tokens,
            "stop_reason": response.stop_reason,
            "id": response.id,
        }

    @staticmethod
    def _final_error(error: Exception) -> AIServiceError:
        if getattr(error, "status_code", None) == 429:
            retry_after = None
            response = getattr(error, "response", None)
            if response is not None:
                header = response.headers.get("retry-after", "")
                retry_after = int(header) if header.isdigit() else None
            return AIRateLimitError(retry_after=retry_after)
        return AIServiceError(f"Claude API request failed: {error}")

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        model: str = "haiku",
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        messages: Optional[List[Dict[str, str]]] = None
    ) -> Dict[str, Any]:
        """
        Send one prompt (after optional earlier turns) and return the reply

        Args:
            prompt: User prompt
            system_prompt: System prompt
            model: "haiku" or "sonnet"
            max_tokens: Defaults to CLAUDE_MAX_TOKENS
            temperature: Defaults to CLAUDE_TEMPERATURE
            messages: Earlier conversation turns

        Returns:
            {content, model, input_tokens, output_tokens, total_tokens, stop_reason, id}

        Raises:
            AIServiceError: no API key, non-retryable failure or retries exhausted
            AIRateLimitError: still rate limited after the last retry
        """
        client = self.client
        model_name = self.models.get(model, self.models["haiku"])
        request = {
            "model": model_name,
            "max_tokens": max_tokens or settings.CLAUDE_MAX_TOKENS,
            "temperature": settings.CLAUDE_TEMPERATURE if temperature is None else temperature,
            "system": system_prompt or "",
            "messages": [*(messages or []), {"role": "user", "content": prompt}],
        }
        max_retries = settings.CLAUDE_MAX_RETRIES
        logger.debug(f"[Claude] model={model_name} max_tokens={request['max_tokens']} prompt_len={len(prompt)}")

        for attempt in range(max_retries + 1):
            started = time.perf_counter()
            try:
                response = await client.messages.create(**request)
            except Exception as e:
                if attempt < max_retries and is_retryable(e):
                    delay = backoff_delay(attempt)
                    logger.warning(
                        f"[Claude] {type(e).__name__} on attempt {attempt + 1}/{max_retries + 1}, "
                        f"retrying in {delay:.1f}s",
                        extra={"event_type": "claude_api_retry", "attempt": attempt + 1, "retry_delay": delay}
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.log_error_with_context(e, context=f"Claude {model_name}", attempt=attempt + 1)
                raise self._final_error(e) from e

            result = self._to_result(response, model_name)
            logger.log_performance(
                f"claude:{model}",
                (time.perf_counter() - started) * 1000,
                threshold_ms=settings.CLAUDE_REQUEST_TIMEOUT * 1000 / 2,
                total_tokens=result["total_tokens"],
            )
            return result

        raise AIServiceError("Claude API request failed after retries")


claude_client = ClaudeClient()
