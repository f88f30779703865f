"""LLM client used by the collaborator adapters.

Provides structured output and JSON generation with retry logic and error
handling using LiteLLM.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any, TypeVar

from litellm import Timeout, acompletion
from pydantic import BaseModel, ValidationError

from resume_builder.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class LLMError(Exception):
    """Exception raised when LLM operations fail."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class ResumeLLM:
    """LLM client for resume parsing and content generation.

    Provides structured output generation with Pydantic models,
    automatic retries, and error handling.
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize the LLM client.

        Args:
            settings: Optional Settings. Uses global settings if not provided.
        """
        self.settings = settings or get_settings()
        self._setup_provider_env()

    def _setup_provider_env(self) -> None:
        """Anthropic reads custom base URLs from the environment, not kwargs."""
        if self.settings.llm_base_url and self.settings.llm_provider == "anthropic":
            base_url = self.settings.llm_base_url.rstrip("/")
            if base_url.endswith("/v1"):
                base_url = base_url[:-3]
            os.environ["ANTHROPIC_BASE_URL"] = base_url
            if self.settings.llm_api_key:
                os.environ["ANTHROPIC_API_KEY"] = self.settings.llm_api_key

    def _get_model_name(self) -> str:
        """Get the model name formatted for LiteLLM.

        Returns:
            Model name with provider prefix if needed.
        """
        model = self.settings.llm_model
        if self.settings.llm_provider == "anthropic":
            return model if "/" in model else f"anthropic/{model}"

        # Custom base URLs are OpenAI-compatible endpoints
        if self.settings.llm_base_url:
            return model if "/" in model else f"openai/{model}"

        if self.settings.llm_provider == "openai":
            return model

        return f"{self.settings.llm_provider}/{model}"

    async def generate_structured(
        self,
        prompt: str,
        output_model: type[T],
        system_prompt: str | None = None,
    ) -> T:
        """Generate structured output matching a Pydantic model.

        Args:
            prompt: The user prompt to send to the LLM.
            output_model: Pydantic model class defining the expected output structure.
            system_prompt: Optional system prompt for context.

        Returns:
            Parsed Pydantic model instance.

        Raises:
            LLMError: If the LLM call fails or response cannot be parsed.
        """
        content = await self._complete(prompt, system_prompt, response_format=output_model)
        try:
            return output_model.model_validate_json(content)
        except ValidationError as e:
            raise LLMError(
                f"Failed to parse LLM response - validation error: {e}", e
            ) from e

    async def generate_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
    ) -> dict[str, Any]:
        """Generate a JSON object without schema validation.

        Raises:
            LLMError: If the LLM call fails or the response is not a JSON object.
        """
        content = await self._complete(prompt, system_prompt)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise LLMError(f"Failed to parse LLM response as JSON: {e}", e) from e
        if not isinstance(data, dict):
            raise LLMError("LLM response is not a JSON object")
        return data

    async def _complete(
        self,
        prompt: str,
        system_prompt: str | None,
        response_format: type[BaseModel] | None = None,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        last_error: Exception | None = None
        for attempt in range(self.settings.llm_max_retries + 1):
            try:
                response = await self._call_completion(messages, response_format)
                return self._extract_content(response)

            except LLMError:
                # Empty responses are not retried
                raise

            except Timeout as e:
                raise LLMError(
                    f"LLM request timed out (timeout={self.settings.llm_timeout}s). "
                    "Increase `RESUME_LLM_TIMEOUT` or use a faster model.",
                    e,
                ) from e

            except Exception as e:
                last_error = e
                if attempt < self.settings.llm_max_retries:
                    is_rate_limit = "rate_limit" in str(e).lower() or "429" in str(e)
                    wait_time = (8 if is_rate_limit else 2) * (attempt + 1)
                    logger.warning(
                        f"LLM call failed (attempt {attempt + 1}), retrying in {wait_time}s: {e}"
                    )
                    await asyncio.sleep(wait_time)
                else:
                    raise LLMError(f"LLM call failed after retries: {e}", e) from e

        raise LLMError(f"LLM call failed: {last_error}", last_error)

    async def _call_completion(
        self,
        messages: list[dict],
        response_format: type[BaseModel] | None = None,
    ):
        """Make the actual LLM API call."""
        kwargs: dict[str, Any] = {
            "model": self._get_model_name(),
            "messages": messages,
            "timeout": self.settings.llm_timeout,
        }
        if self.settings.llm_api_key:
            kwargs["api_key"] = self.settings.llm_api_key
        if self.settings.llm_base_url and self.settings.llm_provider != "anthropic":
            kwargs["base_url"] = self.settings.llm_base_url
        if response_format:
            kwargs["response_format"] = response_format

        return await acompletion(**kwargs)

    def _extract_content(self, response) -> str:
        message = response.choices[0].message
        content = getattr(message, "content", None)

        # Some providers return structured output as tool call arguments.
        if content is None:
            tool_calls = getattr(message, "tool_calls", None) or []
            if tool_calls:
                arguments = getattr(getattr(tool_calls[0], "function", None), "arguments", None)
                if isinstance(arguments, str) and arguments.strip():
                    content = arguments

        if content is None:
            raise LLMError("LLM returned no content to parse.")

        return extract_json(content)


def extract_json(content: str) -> str:
    """Extract a JSON document from a response, handling code fences and preambles.

    Args:
        content: Raw response content.

    Returns:
        The JSON text (or the stripped content when no JSON is found).
    """
    content = content.strip()

    if content.startswith("```"):
        first_newline = content.find("\n")
        if first_newline != -1:
            content = content[first_newline + 1 :]
        if content.endswith("```"):
            content = content[:-3]
        content = content.strip()

    if content.startswith("{") or content.startswith("["):
        return content

    def extract_balanced(text: str, open_char: str, close_char: str) -> str | None:
        start = text.find(open_char)
        if start == -1:
            return None
        depth = 0
        for idx in range(start, len(text)):
            ch = text[idx]
            if ch == open_char:
                depth += 1
            elif ch == close_char:
                depth -= 1
                if depth == 0:
                    return text[start : idx + 1].strip()
        return None

    for open_char, close_char in (("{", "}"), ("[", "]")):
        extracted = extract_balanced(content, open_char, close_char)
        if extracted is not None:
            return extracted

    return content
