#!/usr/bin/env python3

import logging
from typing import Any, Dict, Optional

from openai import AzureOpenAI, OpenAI, OpenAIError
from pydantic import ValidationError

from config import ModelConfig
from reviewbot.models import FileReviews, ReviewFailure, ReviewResult, ReviewSuccess
from reviewbot.reviewers.base_reviewer import BaseReviewer

logger = logging.getLogger(__name__)


def create_client(model_config: ModelConfig):
    """Builds the OpenAI client, or the Azure OpenAI one when Azure is configured."""
    if model_config.use_azure:
        return AzureOpenAI(
            base_url=model_config.azure_openai_endpoint,
            api_key=model_config.azure_openai_key,
            api_version=model_config.azure_openai_api_version,
        )
    return OpenAI(api_key=model_config.openai_api_key)


class AICodeReviewer(BaseReviewer):
    """AI-powered code reviewer using the OpenAI chat completions API."""

    def __init__(self, model_config: ModelConfig, client: Optional[Any] = None):
        super().__init__()
        self.model_config = model_config
        self.client = client if client is not None else create_client(model_config)

    def build_request(self, prompt: str) -> Dict[str, Any]:
        """
        Builds the chat completion arguments for a prompt.

        The whole prompt goes into a single message.
        """
        request = {
            "model": self.model_config.model,
            "temperature": self.model_config.temperature,
            "max_tokens": self.model_config.max_tokens,
            "top_p": self.model_config.top_p,
            "frequency_penalty": 0,
            "presence_penalty": 0,
            "messages": [{"role": "system", "content": prompt}],
        }
        if self.model_config.supports_json_mode:
            request["response_format"] = {"type": "json_object"}
        return request

    def review_prompt(self, prompt: str) -> ReviewResult:
        """
        Sends a code review prompt to the model and returns the parsed reviews.

        Args:
            prompt: The prompt containing the code diff and review instructions

        Returns:
            ReviewSuccess with the reviews, empty when the model said nothing;
            ReviewFailure when the request failed or the answer was not valid
        """
        logger.info("Sending request to %s", self.model_config.model)

        try:
            response = self.client.chat.completions.create(**self.build_request(prompt))
        except OpenAIError as e:
            logger.error("Error during OpenAI API call: %s", e)
            return ReviewFailure(f"Model request failed: {e}")

        content = None
        if response.choices:
            content = response.choices[0].message.content
        content = (content or "").strip()
        logger.debug("Model response: %s", content)

        if not content:
            return ReviewSuccess([])

        try:
            parsed = FileReviews.model_validate_json(content)
        except ValidationError as e:
            logger.error("Model response does not match the reviews format: %s", e)
            return ReviewFailure(f"Invalid model response: {e}")

        return ReviewSuccess(parsed.reviews)
