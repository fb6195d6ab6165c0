"""Prose summaries of a task list via the OpenAI completions API."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import openai

from todo_summary.exceptions import ConfigurationError, SummaryGenerationError
from todo_summary.models import Task

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo-instruct"
PROMPT_HEADER = "Summarize these todos in a concise and meaningful way:"


def build_prompt(tasks: Sequence[Task]) -> str:
    """One bullet per task under the instruction line."""
    lines = "\n".join(f"- {task.text}" for task in tasks)
    return f"{PROMPT_HEADER}\n{lines}"


class LLMSummarizer:
    """Generates a short prose summary of the given tasks."""

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 200,
        temperature: float = 0.7,
        client: openai.AsyncOpenAI | None = None,
    ):
        if client is None:
            if not api_key or not api_key.strip():
                raise ConfigurationError("OPENAI_API_KEY is not configured")
            client = openai.AsyncOpenAI(api_key=api_key)

        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client = client

    async def summarize(self, tasks: Sequence[Task]) -> str:
        """Return the trimmed completion text.

        Raises:
            SummaryGenerationError: If the API call fails or returns nothing
        """
        prompt = build_prompt(tasks)
        logger.debug("Requesting summary for %d todos from %s", len(tasks), self.model)

        try:
            response = await self._client.completions.create(
                model=self.model,
                prompt=prompt,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.OpenAIError as e:
            logger.error("Summary generation failed: %s", e)
            raise SummaryGenerationError(f"Failed to generate summary: {e}") from e

        text = response.choices[0].text.strip() if response.choices else ""
        if not text:
            raise SummaryGenerationError("Language model returned an empty summary")
        return text
