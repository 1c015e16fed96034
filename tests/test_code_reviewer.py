"""Tests for asking the model about a hunk and reading its answer."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
from openai import OpenAIError

from config import ModelConfig
from reviewbot.models import ReviewFailure, ReviewSuccess
from reviewbot.reviewers.code_reviewer import AICodeReviewer, create_client


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _reviewer(content=None, supports_json_mode=False, error=None):
    client = Mock()
    if error is not None:
        client.chat.completions.create.side_effect = error
    else:
        client.chat.completions.create.return_value = _response(content)
    model_config = ModelConfig(model="gpt-4o-mini", max_tokens=700, supports_json_mode=supports_json_mode)
    return AICodeReviewer(model_config, client=client), client


class TestReviewPrompt:

    def test_parses_reviews(self):
        reviewer, _ = _reviewer('{"reviews":[{"lineNumber":12,"reviewComment":"avoid mutation here"}]}')

        result = reviewer.review_prompt("prompt")

        assert isinstance(result, ReviewSuccess)
        assert len(result.reviews) == 1
        assert result.reviews[0].lineNumber == 12
        assert result.reviews[0].reviewComment == "avoid mutation here"

    def test_empty_reviews_is_success(self):
        reviewer, _ = _reviewer('{"reviews":[]}')

        assert reviewer.review_prompt("prompt") == ReviewSuccess([])

    @pytest.mark.parametrize("content", [None, "", "   \n"])
    def test_empty_response_is_success(self, content):
        reviewer, _ = _reviewer(content)

        assert reviewer.review_prompt("prompt") == ReviewSuccess([])

    def test_no_choices_is_success(self):
        reviewer, client = _reviewer()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])

        assert reviewer.review_prompt("prompt") == ReviewSuccess([])

    @pytest.mark.parametrize("content", [
        "Looks good to me!",
        '{"reviews": [',
        '{"comments": []}',
        '[{"lineNumber": 1, "reviewComment": "x"}]',
        '{"reviews": [{"reviewComment": "missing line"}]}',
        '{"reviews": [{"lineNumber": 3}]}',
    ])
    def test_invalid_response_is_failure(self, content):
        reviewer, _ = _reviewer(content)

        assert isinstance(reviewer.review_prompt("prompt"), ReviewFailure)

    def test_extra_fields_are_ignored(self):
        reviewer, _ = _reviewer(
            '{"reviews":[{"lineNumber":"4","reviewComment":"x","priority":1}],"summary":"ok"}'
        )

        result = reviewer.review_prompt("prompt")

        assert isinstance(result, ReviewSuccess)
        assert result.reviews[0].lineNumber == "4"

    def test_api_error_is_failure(self):
        reviewer, _ = _reviewer(error=OpenAIError("rate limited"))

        result = reviewer.review_prompt("prompt")

        assert isinstance(result, ReviewFailure)
        assert "rate limited" in result.reason


class TestBuildRequest:

    def test_request_settings(self):
        reviewer, client = _reviewer('{"reviews":[]}')

        reviewer.review_prompt("the prompt")

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 700
        assert kwargs["top_p"] == 1.0
        assert kwargs["frequency_penalty"] == 0
        assert kwargs["presence_penalty"] == 0
        assert kwargs["messages"] == [{"role": "system", "content": "the prompt"}]
        assert "response_format" not in kwargs

    def test_json_mode(self):
        reviewer, _ = _reviewer(supports_json_mode=True)

        request = reviewer.build_request("p")

        assert request["response_format"] == {"type": "json_object"}


class TestCreateClient:

    def test_openai_client(self):
        with patch("reviewbot.reviewers.code_reviewer.OpenAI") as openai_cls:
            create_client(ModelConfig(model="m", openai_api_key="sk-test"))

        openai_cls.assert_called_once_with(api_key="sk-test")

    def test_azure_client(self):
        model_config = ModelConfig(
            model="deployment",
            azure_openai_endpoint="https://example.openai.azure.com",
            azure_openai_key="azure-key",
            azure_openai_api_version="2024-06-01",
        )
        with patch("reviewbot.reviewers.code_reviewer.AzureOpenAI") as azure_cls:
            create_client(model_config)

        azure_cls.assert_called_once_with(
            base_url="https://example.openai.azure.com",
            api_key="azure-key",
            api_version="2024-06-01",
        )
