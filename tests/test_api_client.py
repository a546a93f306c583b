from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from utils.api_client import (
    DEFAULT_MODEL,
    ContentGenerationError,
    GenerationClient,
    ModelRouter,
)


def completion(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5),
    )


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create.return_value = completion('{"ideas": ["a"]}')
    return client


class TestGenerationClient:

    def test_missing_api_key_raises(self):
        with pytest.raises(ValueError):
            GenerationClient("")

    def test_sdk_client_is_built_without_retries(self):
        with patch("utils.api_client.openai.OpenAI") as mock_openai:
            GenerationClient("sk-test", {"generation": {"request_timeout": 30}})

        kwargs = mock_openai.call_args.kwargs
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["max_retries"] == 0
        assert kwargs["timeout"] == 30
        assert kwargs["base_url"] == "https://openrouter.ai/api/v1"

    def test_schema_becomes_response_format(self, openai_client):
        client = GenerationClient("sk-test", openai_client=openai_client)
        schema = {"type": "object", "properties": {"ideas": {"type": "array"}}}

        result = client.generate_content("prompt", model="m", response_schema=schema,
                                         schema_name="topic_ideas")

        assert result == '{"ideas": ["a"]}'
        request = openai_client.chat.completions.create.call_args.kwargs
        assert request["model"] == "m"
        assert request["messages"] == [{"role": "user", "content": "prompt"}]
        assert request["response_format"] == {
            "type": "json_schema",
            "json_schema": {"name": "topic_ideas", "schema": schema, "strict": False},
        }

    def test_plain_request_has_no_response_format(self, openai_client):
        client = GenerationClient("sk-test", {"generation": {"max_tokens": 1234}},
                                  openai_client=openai_client)

        client.generate_content("prompt")

        request = openai_client.chat.completions.create.call_args.kwargs
        assert "response_format" not in request
        assert request["max_tokens"] == 1234
        assert request["model"] == DEFAULT_MODEL

    def test_explicit_max_tokens_wins(self, openai_client):
        client = GenerationClient("sk-test", openai_client=openai_client)

        client.generate_content("prompt", max_tokens=20)

        assert openai_client.chat.completions.create.call_args.kwargs["max_tokens"] == 20

    def test_api_error_is_wrapped(self, openai_client):
        request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
        openai_client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)
        client = GenerationClient("sk-test", openai_client=openai_client)

        with pytest.raises(ContentGenerationError) as exc_info:
            client.generate_content("prompt")

        assert isinstance(exc_info.value.__cause__, openai.APIConnectionError)
        assert openai_client.chat.completions.create.call_count == 1

    def test_unexpected_error_is_wrapped(self, openai_client):
        openai_client.chat.completions.create.side_effect = RuntimeError("boom")
        client = GenerationClient("sk-test", openai_client=openai_client)

        with pytest.raises(ContentGenerationError):
            client.generate_content("prompt")

    def test_missing_content_returns_empty_string(self, openai_client):
        openai_client.chat.completions.create.return_value = completion(None)
        client = GenerationClient("sk-test", openai_client=openai_client)

        assert client.generate_content("prompt") == ""


class TestModelRouter:

    def test_task_models_override_default(self):
        client = MagicMock(spec=GenerationClient)
        router = ModelRouter(client, {"generation": {
            "model": "default/model",
            "task_models": {"tagline": "small/model"},
        }})

        assert router.model_for("tagline") == "small/model"
        assert router.model_for("posts") == "default/model"

    def test_request_is_forwarded(self):
        client = MagicMock(spec=GenerationClient)
        client.generate_content.return_value = "ok"
        router = ModelRouter(client)

        assert router.generate_content("hashtags", "prompt", response_schema={"a": 1}) == "ok"

        client.generate_content.assert_called_once_with(
            "prompt",
            model=DEFAULT_MODEL,
            response_schema={"a": 1},
            schema_name="hashtags",
            max_tokens=None,
            reasoning=None,
            task_type="hashtags",
        )

    def test_task_reasoning_is_forwarded_for_that_task_only(self):
        client = MagicMock(spec=GenerationClient)
        router = ModelRouter(client, {"generation": {"task_reasoning": {"tagline": {"max_tokens": 0}}}})

        router.generate_content("tagline", "prompt", max_tokens=20)
        assert client.generate_content.call_args.kwargs["reasoning"] == {"max_tokens": 0}

        router.generate_content("posts", "prompt")
        assert client.generate_content.call_args.kwargs["reasoning"] is None


class TestReasoningSetting:

    def test_reasoning_goes_into_extra_body(self, openai_client):
        client = GenerationClient("sk-test", openai_client=openai_client)

        client.generate_content("prompt", max_tokens=20, reasoning={"max_tokens": 0})

        request = openai_client.chat.completions.create.call_args.kwargs
        assert request["extra_body"] == {"reasoning": {"max_tokens": 0}}
        assert request["max_tokens"] == 20

    def test_no_extra_body_without_reasoning(self, openai_client):
        client = GenerationClient("sk-test", openai_client=openai_client)

        client.generate_content("prompt")

        assert "extra_body" not in openai_client.chat.completions.create.call_args.kwargs
