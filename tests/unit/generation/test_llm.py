"""Unit tests for the LLM client.

Tests for ResumeLLM initialization, structured output, JSON generation,
error handling, and retry logic.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import BaseModel

from resume_builder.config.settings import Settings, reset_settings
from resume_builder.generation.llm import LLMError, ResumeLLM, extract_json


class SampleOutput(BaseModel):
    """Sample Pydantic model for testing structured output."""

    name: str
    value: int


def make_response(content):
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


class TestResumeLLMInitialization:
    """Tests for ResumeLLM initialization."""

    def teardown_method(self):
        """Reset settings after each test."""
        reset_settings()

    def test_init_with_default_settings(self, isolated_env):
        """Test that the client falls back to global settings."""
        llm = ResumeLLM()
        assert llm.settings.llm_provider == "openai"
        assert llm._get_model_name() == "gpt-4o"

    def test_model_name_with_provider_prefix(self, isolated_env):
        """Test that non-openai providers are prefixed."""
        llm = ResumeLLM(settings=Settings(llm_provider="gemini", llm_model="gemini-1.5-pro"))
        assert llm._get_model_name() == "gemini/gemini-1.5-pro"

    def test_model_name_with_custom_base_url(self, isolated_env):
        """Test that custom endpoints are treated as OpenAI-compatible."""
        settings = Settings(llm_provider="local", llm_model="llama3", llm_base_url="http://localhost:8000/v1")
        assert ResumeLLM(settings=settings)._get_model_name() == "openai/llama3"


class TestResumeLLMStructuredOutput:
    """Tests for structured output generation."""

    def teardown_method(self):
        """Reset settings after each test."""
        reset_settings()

    @pytest.mark.asyncio
    async def test_generate_structured_returns_pydantic_model(self):
        """Test that generate_structured returns parsed Pydantic model."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = make_response('{"name": "test", "value": 42}')

            llm = ResumeLLM(settings=Settings())
            result = await llm.generate_structured(prompt="Generate", output_model=SampleOutput)

            assert isinstance(result, SampleOutput)
            assert result.value == 42
            assert mock_completion.call_args.kwargs["response_format"] == SampleOutput

    @pytest.mark.asyncio
    async def test_system_prompt_is_first_message(self):
        """Test that the system prompt precedes the user prompt."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = make_response('{"name": "x", "value": 1}')

            llm = ResumeLLM(settings=Settings())
            await llm.generate_structured(
                prompt="User prompt",
                output_model=SampleOutput,
                system_prompt="You are a resume writer",
            )

            messages = mock_completion.call_args.kwargs["messages"]
            assert [m["role"] for m in messages] == ["system", "user"]
            assert messages[0]["content"] == "You are a resume writer"

    @pytest.mark.asyncio
    async def test_reads_fenced_json(self):
        """Test that JSON inside a code fence is extracted."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = make_response('```json\n{"name": "x", "value": 3}\n```')

            result = await ResumeLLM(settings=Settings()).generate_structured("p", SampleOutput)

            assert result.value == 3

    @pytest.mark.asyncio
    async def test_reads_tool_call_arguments(self):
        """Test that structured output delivered as a tool call is used."""
        response = MagicMock()
        tool_call = MagicMock(function=MagicMock(arguments='{"name": "tool", "value": 7}'))
        response.choices = [MagicMock(message=MagicMock(content=None, tool_calls=[tool_call]))]

        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = response

            result = await ResumeLLM(settings=Settings()).generate_structured("p", SampleOutput)

            assert result.name == "tool"

    @pytest.mark.asyncio
    async def test_passes_timeout_and_api_key(self, isolated_env):
        """Test that timeout and API key settings reach LiteLLM."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = make_response('{"name": "x", "value": 1}')

            settings = Settings(llm_timeout=30.0, llm_api_key="test-api-key")
            await ResumeLLM(settings=settings).generate_structured("p", SampleOutput)

            assert mock_completion.call_args.kwargs["timeout"] == 30.0
            assert mock_completion.call_args.kwargs["api_key"] == "test-api-key"


class TestResumeLLMJson:
    """Tests for schema-less JSON generation."""

    @pytest.mark.asyncio
    async def test_generate_json_returns_dict(self):
        """Test that a JSON object is returned as a dict."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = make_response('Here you go: {"name": "Jane"}')

            result = await ResumeLLM(settings=Settings()).generate_json("p")

            assert result == {"name": "Jane"}
            assert "response_format" not in mock_completion.call_args.kwargs

    @pytest.mark.asyncio
    async def test_generate_json_rejects_non_object(self):
        """Test that a JSON array is rejected."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = make_response("[1, 2]")

            with pytest.raises(LLMError):
                await ResumeLLM(settings=Settings()).generate_json("p")

    @pytest.mark.asyncio
    async def test_generate_json_rejects_invalid_json(self):
        """Test that non-JSON text raises LLMError."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = make_response("not json at all")

            with pytest.raises(LLMError) as exc_info:
                await ResumeLLM(settings=Settings()).generate_json("p")

            assert "Failed to parse" in str(exc_info.value)


class TestResumeLLMErrorHandling:
    """Tests for error handling and retries."""

    @pytest.mark.asyncio
    async def test_raises_llm_error_on_failure(self):
        """Test that LLMError wraps the provider error."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.side_effect = Exception("API Error")

            llm = ResumeLLM(settings=Settings(llm_max_retries=0))
            with pytest.raises(LLMError) as exc_info:
                await llm.generate_structured("p", SampleOutput)

            assert "API Error" in str(exc_info.value)
            assert exc_info.value.original_error is not None

    @pytest.mark.asyncio
    async def test_raises_llm_error_on_validation_error(self):
        """Test that a response missing fields raises LLMError."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = make_response('{"name": "test"}')

            with pytest.raises(LLMError) as exc_info:
                await ResumeLLM(settings=Settings()).generate_structured("p", SampleOutput)

            assert "validation" in str(exc_info.value).lower()

    @pytest.mark.asyncio
    async def test_empty_response_is_not_retried(self):
        """Test that a response without content fails immediately."""
        with patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = make_response(None)
            mock_completion.return_value.choices[0].message.tool_calls = None

            llm = ResumeLLM(settings=Settings(llm_max_retries=3))
            with pytest.raises(LLMError):
                await llm.generate_structured("p", SampleOutput)

            assert mock_completion.call_count == 1

    @pytest.mark.asyncio
    async def test_retries_on_transient_failure(self):
        """Test that transient failures trigger retries."""
        call_count = 0

        async def side_effect(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise Exception("Transient error")
            return make_response('{"name": "success", "value": 1}')

        with (
            patch("resume_builder.generation.llm.acompletion", new_callable=AsyncMock) as mock_completion,
            patch("resume_builder.generation.llm.asyncio.sleep", new_callable=AsyncMock),
        ):
            mock_completion.side_effect = side_effect

            llm = ResumeLLM(settings=Settings(llm_max_retries=3))
            result = await llm.generate_structured("p", SampleOutput)

            assert result.name == "success"
            assert call_count == 3


class TestExtractJson:
    """Tests for JSON extraction from raw responses."""

    def test_plain_object(self):
        """Test that a bare object is returned unchanged."""
        assert extract_json('{"a": 1}') == '{"a": 1}'

    def test_code_fence(self):
        """Test that code fences are removed."""
        assert extract_json('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_preamble_and_trailer(self):
        """Test that surrounding prose is dropped."""
        assert extract_json('Sure! {"a": {"b": 2}} Hope this helps.') == '{"a": {"b": 2}}'

    def test_no_json(self):
        """Test that text without JSON is returned stripped."""
        assert extract_json("  nothing here ") == "nothing here"
