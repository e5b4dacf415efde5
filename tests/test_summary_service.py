"""
Tests for the summary provider.

Covers link parsing per source, dispatch, metadata fetching through a mocked
transport and the failure taxonomy.
"""

import httpx
import pytest
from unittest.mock import Mock

from secondbrain.core.errors import InvalidLinkFormat, SummaryGenerationFailed
from secondbrain.models.content import SourceName
from secondbrain.services import llm_service
from secondbrain.services.summary_service import (
    GitHubStrategy,
    SummarizationSkipped,
    Summarized,
    TwitterStrategy,
    YouTubeStrategy,
    build_default_provider,
)
from tests.conftest import GENERATED_SUMMARY, GITHUB_README


# =============================================================================
# Link parsing
# =============================================================================

@pytest.mark.parametrize("link,expected", [
    ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://youtube.com/watch?v=dQw4w9WgXcQ&t=42", "dQw4w9WgXcQ"),
    ("https://youtu.be/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://www.youtube.com/shorts/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
])
def test_youtube_extracts_video_id(link, expected):
    assert YouTubeStrategy().extract_id(link) == expected


@pytest.mark.parametrize("link", [
    "https://www.youtube.com/channel/abc",
    "https://www.youtube.com/watch",
    "https://vimeo.com/12345",
])
def test_youtube_rejects_links_without_video(link):
    with pytest.raises(InvalidLinkFormat):
        YouTubeStrategy().extract_id(link)


def test_twitter_extracts_status_id():
    assert TwitterStrategy().extract_id("https://twitter.com/jack/status/20") == "20"
    assert TwitterStrategy().extract_id("https://x.com/jack/status/20?s=21") == "20"


def test_twitter_rejects_profile_links():
    with pytest.raises(InvalidLinkFormat):
        TwitterStrategy().extract_id("https://twitter.com/jack")


def test_github_extracts_owner_and_repo():
    assert GitHubStrategy().extract_id("https://github.com/x/y") == ("x", "y")
    assert GitHubStrategy().extract_id("https://github.com/x/y.git") == ("x", "y")
    assert GitHubStrategy().extract_id("https://github.com/x/y/tree/main/src") == ("x", "y")


def test_github_rejects_owner_only_links():
    with pytest.raises(InvalidLinkFormat):
        GitHubStrategy().extract_id("https://github.com/x")


# =============================================================================
# Dispatch and generation
# =============================================================================

def test_github_summary_uses_description_and_readme(provider, generate):
    summary = provider.summarize(SourceName.GITHUB, "https://github.com/x/y")

    assert summary == GENERATED_SUMMARY
    prompt_text = generate.call_args.args[0]
    assert "Repository description" in prompt_text
    assert GITHUB_README in prompt_text


def test_youtube_summary_uses_title_and_description(provider, generate):
    provider.summarize("youtube", "https://www.youtube.com/watch?v=dQw4w9WgXcQ")

    assert generate.call_args.args[0] == "Video title Video description"


def test_twitter_summary_uses_tweet_text(provider, generate):
    provider.summarize("twitter", "https://twitter.com/jack/status/20")

    assert generate.call_args.args[0] == "Tweet text"


@pytest.mark.parametrize("source", ["facebook", "none", "myspace"])
def test_unsupported_source_returns_empty_summary(provider, generate, source):
    assert provider.summarize(source, "https://example.com/post/1") == ""
    generate.assert_not_called()


def test_invalid_link_raises_invalid_link_format(provider, generate):
    with pytest.raises(InvalidLinkFormat):
        provider.summarize("github", "https://github.com/x")
    generate.assert_not_called()


def test_metadata_failure_raises_summary_generation_failed(provider, generate):
    with pytest.raises(SummaryGenerationFailed) as exc_info:
        provider.summarize("github", "https://github.com/missing/repo")

    assert exc_info.value.source == "github"
    generate.assert_not_called()


def test_generation_failure_raises_summary_generation_failed(http_client):
    failing = build_default_provider(generate=Mock(side_effect=RuntimeError("quota exceeded")), http_client=http_client)

    with pytest.raises(SummaryGenerationFailed, match="quota exceeded"):
        failing.summarize("github", "https://github.com/x/y")


def test_github_repo_without_readme_is_still_summarized(generate):
    def handler(request):
        if request.url.path.endswith("/readme"):
            return httpx.Response(404)
        return httpx.Response(200, json={"description": "Only a description"})

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        build_default_provider(generate=generate, http_client=client).summarize("github", "https://github.com/x/y")

    assert generate.call_args.args[0] == "Only a description"


# =============================================================================
# try_summarize outcomes
# =============================================================================

def test_try_summarize_success(provider):
    outcome = provider.try_summarize("github", "https://github.com/x/y")

    assert outcome == Summarized(text=GENERATED_SUMMARY)


def test_try_summarize_swallows_failures(http_client):
    failing = build_default_provider(generate=Mock(side_effect=RuntimeError("boom")), http_client=http_client)

    outcome = failing.try_summarize("github", "https://github.com/x/y")

    assert isinstance(outcome, SummarizationSkipped)
    assert "boom" in outcome.reason


def test_try_summarize_skips_unsupported_sources(provider):
    outcome = provider.try_summarize(None, "https://example.com")

    assert isinstance(outcome, SummarizationSkipped)


def test_generate_summary_prefixes_fixed_instruction(monkeypatch):
    captured = {}
    monkeypatch.setattr(llm_service, "generate_text", lambda prompt: captured.setdefault("prompt", prompt))

    llm_service.generate_summary("some text")

    assert captured["prompt"].startswith(llm_service.SUMMARY_INSTRUCTION)
    assert captured["prompt"].endswith("some text")


@pytest.mark.parametrize("source,link,body", [
    ("twitter", "https://x.com/jack/status/20", {"data": None}),
    ("youtube", "https://youtu.be/dQw4w9WgXcQ", []),
    ("github", "https://github.com/x/y", ["not", "an", "object"]),
])
def test_unexpected_payload_shape_raises_summary_generation_failed(generate, source, link, body):
    with httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=body))) as client:
        with pytest.raises(SummaryGenerationFailed, match="metadata fetch failed"):
            build_default_provider(generate=generate, http_client=client).summarize(source, link)

    generate.assert_not_called()
