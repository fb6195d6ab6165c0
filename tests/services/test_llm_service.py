"""Unit tests for the LLM summarizer with a mocked OpenAI client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import openai
import pytest

from todo_summary.exceptions import ConfigurationError, SummaryGenerationError
from todo_summary.services.llm_service import LLMSummarizer, build_prompt


def _client(text: str | None = None, error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    if error is not None:
        client.completions.create = AsyncMock(side_effect=error)
    else:
        choices = [] if text is None else [SimpleNamespace(text=text)]
        client.completions.create = AsyncMock(return_value=SimpleNamespace(choices=choices))
    return client


def test_build_prompt(make_task):
    tasks = [make_task("Buy milk"), make_task("Walk dog", completed=True)]
    assert build_prompt(tasks) == (
        "Summarize these todos in a concise and meaningful way:\n- Buy milk\n- Walk dog"
    )


def test_missing_api_key_raises():
    with pytest.raises(ConfigurationError):
        LLMSummarizer(None)
    with pytest.raises(ConfigurationError):
        LLMSummarizer("  ")


@pytest.mark.asyncio
async def test_summarize_returns_trimmed_completion(make_task):
    client = _client("  You have one errand left.\n")
    summarizer = LLMSummarizer("sk-test", client=client)
    tasks = [make_task("Buy milk")]

    assert await summarizer.summarize(tasks) == "You have one errand left."
    client.completions.create.assert_awaited_once_with(
        model="gpt-3.5-turbo-instruct",
        prompt=build_prompt(tasks),
        max_tokens=200,
        temperature=0.7,
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "   "])
async def test_empty_completion_raises(make_task, text):
    summarizer = LLMSummarizer("sk-test", client=_client(text))
    with pytest.raises(SummaryGenerationError):
        await summarizer.summarize([make_task()])


@pytest.mark.asyncio
async def test_api_error_raises(make_task):
    summarizer = LLMSummarizer("sk-test", client=_client(error=openai.OpenAIError("quota")))
    with pytest.raises(SummaryGenerationError, match="quota"):
        await summarizer.summarize([make_task()])
