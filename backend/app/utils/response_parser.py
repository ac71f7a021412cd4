"""
Model Response JSON Parser
Extracts a JSON object from Claude's text output with an explicit fallback chain

Models are asked for bare JSON but often wrap it in markdown fences, add a
sentence around it, or leave trailing commas. The chain below tries, in order:

1. Parse the whole text as is
2. Parse it again without an outer ```json / ``` wrapper fence
3. Parse the outermost {...} span
4. Repair trailing commas and control characters, then parse again

Fences inside the JSON (e.g. a README's code blocks in file contents) are
never touched.

If every step fails, AIResponseParseError is raised. There is no partial result.
"""

from typing import Any, Dict, Optional
import json
import re

from app.core.exceptions import AIResponseParseError
from app.core.logging_config import logger


_FENCE_OPEN = re.compile(r"\A```[A-Za-z]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```\Z")
_OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_CONTROL_CHARS = re.compile(r"[\u0000-\u001F]+")


class JSONResponseParser:
    """Best-effort JSON extraction from model responses"""

    @staticmethod
    def strip_code_fences(response: str) -> str:
        """Remove one markdown fence wrapping the whole response, and trim whitespace"""
        text = (response or "").strip()
        if not text.startswith("```"):
            return text
        text = _FENCE_OPEN.sub("", text)
        text = _FENCE_CLOSE.sub("", text)
        return text.strip()

    @staticmethod
    def extract_object_span(text: str) -> Optional[str]:
        """
        Return the text from the first '{' to the last '}', or None

        Args:
            text: Fence-stripped response text

        Returns:
            The candidate JSON object text
        """
        match = _OBJECT_SPAN.search(text)
        return match.group(0) if match else None

    @staticmethod
    def repair(text: str) -> str:
        """Remove trailing commas and raw control characters"""
        fixed = _TRAILING_COMMA.sub(r"\1", text)
        return _CONTROL_CHARS.sub("", fixed)

    @classmethod
    def parse(cls, response: str) -> Any:
        """
        Parse JSON from a model response

        Args:
            response: Raw response text from Claude

        Returns:
            The decoded JSON value

        Raises:
            AIResponseParseError: when no step of the fallback chain succeeds
        """
        raw = (response or "").strip()
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("[JSONResponseParser] Direct parse failed, removing wrapper fence")

        text = cls.strip_code_fences(raw)
        if text != raw:
            try:
                return json.loads(text)
            except json.JSONDecodeError:
                logger.debug("[JSONResponseParser] Unfenced parse failed, extracting object span")

        span = cls.extract_object_span(text)
        if span is None:
            raise AIResponseParseError("Failed to parse JSON from AI response: no JSON object found")

        try:
            return json.loads(span)
        except json.JSONDecodeError:
            logger.debug("[JSONResponseParser] Object span parse failed, attempting repair")

        try:
            return json.loads(cls.repair(span))
        except json.JSONDecodeError as e:
            raise AIResponseParseError(f"Failed to parse JSON from AI response: {e.msg}") from e

    @classmethod
    def parse_object(cls, response: str) -> Dict[str, Any]:
        """Parse and require a JSON object (dict)"""
        value = cls.parse(response)
        if not isinstance(value, dict):
            raise AIResponseParseError(
                f"Expected a JSON object from AI response, got {type(value).__name__}"
            )
        return value


# Singleton instance
json_parser = JSONResponseParser()
