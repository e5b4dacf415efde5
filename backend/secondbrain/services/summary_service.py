# FILE: backend/secondbrain/services/summary_service.py
# 1. Turns a (source, link) pair into summary text: fetch source metadata, then ask the LLM.
# 2. One strategy per supported source, registered on the provider by source name.
# 3. Unsupported sources yield an empty summary. No retries, no persistence.

import base64
import re
import structlog
import httpx
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union
from urllib.parse import urlparse, parse_qs

from ..core.config import settings
from ..core.errors import InvalidLinkFormat, SummaryError, SummaryGenerationFailed
from ..models.content import SourceName
from . import llm_service

logger = structlog.get_logger(__name__)

YOUTUBE_VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"
TWITTER_TWEETS_URL = "https://api.twitter.com/2/tweets/{tweet_id}"
GITHUB_REPO_URL = "https://api.github.com/repos/{owner}/{repo}"
GITHUB_README_URL = "https://api.github.com/repos/{owner}/{repo}/readme"

_YOUTUBE_ID = re.compile(r"^[A-Za-z0-9_-]{6,}$")

# --- Outcome types ---

@dataclass(frozen=True)
class Summarized:
    text: str

@dataclass(frozen=True)
class SummarizationSkipped:
    reason: str

SummaryOutcome = Union[Summarized, SummarizationSkipped]

# --- Source strategies ---

class SourceStrategy:
    """Fetches the text worth summarizing for one source. Subclasses set `source`."""
    source: SourceName

    def extract_id(self, link: str):
        raise NotImplementedError

    def fetch_text(self, client: httpx.Client, link: str) -> str:
        raise NotImplementedError

    def _invalid(self, link: str) -> InvalidLinkFormat:
        return InvalidLinkFormat(self.source.value, link)


class YouTubeStrategy(SourceStrategy):
    source = SourceName.YOUTUBE

    def extract_id(self, link: str) -> str:
        parsed = urlparse(link)
        host = (parsed.hostname or "").lower().removeprefix("www.").removeprefix("m.")
        video_id: Optional[str] = None
        if host == "youtu.be":
            video_id = parsed.path.strip("/").split("/")[0]
        elif host.endswith("youtube.com"):
            if parsed.path.startswith("/shorts/"):
                video_id = parsed.path.split("/")[2]
            else:
                video_id = (parse_qs(parsed.query).get("v") or [None])[0]
        if not video_id or not _YOUTUBE_ID.match(video_id):
            raise self._invalid(link)
        return video_id

    def fetch_text(self, client: httpx.Client, link: str) -> str:
        video_id = self.extract_id(link)
        response = client.get(
            YOUTUBE_VIDEOS_URL,
            params={"part": "snippet", "id": video_id, "key": settings.YOUTUBE_API_KEY},
        )
        response.raise_for_status()
        items = response.json().get("items") or []
        if not items:
            raise LookupError(f"YouTube video {video_id} not found")
        snippet = items[0].get("snippet", {})
        return f"{snippet.get('title', '')} {snippet.get('description', '')}".strip()


class TwitterStrategy(SourceStrategy):
    source = SourceName.TWITTER

    def extract_id(self, link: str) -> str:
        parsed = urlparse(link)
        host = (parsed.hostname or "").lower().removeprefix("www.").removeprefix("mobile.")
        parts = [p for p in parsed.path.split("/") if p]
        if host not in ("twitter.com", "x.com") or len(parts) < 3 or parts[1] != "status" or not parts[2].isdigit():
            raise self._invalid(link)
        return parts[2]

    def fetch_text(self, client: httpx.Client, link: str) -> str:
        tweet_id = self.extract_id(link)
        response = client.get(
            TWITTER_TWEETS_URL.format(tweet_id=tweet_id),
            headers={"Authorization": f"Bearer {settings.TWITTER_BEARER_TOKEN}"},
        )
        response.raise_for_status()
        return response.json()["data"]["text"]


class GitHubStrategy(SourceStrategy):
    source = SourceName.GITHUB

    def extract_id(self, link: str) -> tuple[str, str]:
        parsed = urlparse(link)
        host = (parsed.hostname or "").lower().removeprefix("www.")
        parts = [p for p in parsed.path.split("/") if p]
        if host != "github.com" or len(parts) < 2:
            raise self._invalid(link)
        return parts[0], parts[1].removesuffix(".git")

    def fetch_text(self, client: httpx.Client, link: str) -> str:
        owner, repo = self.extract_id(link)
        headers = {"Accept": "application/vnd.github+json"}
        if settings.GITHUB_ACCESS_TOKEN:
            headers["Authorization"] = f"token {settings.GITHUB_ACCESS_TOKEN}"

        repo_response = client.get(GITHUB_REPO_URL.format(owner=owner, repo=repo), headers=headers)
        repo_response.raise_for_status()
        description = repo_response.json().get("description") or ""

        readme = ""
        readme_response = client.get(GITHUB_README_URL.format(owner=owner, repo=repo), headers=headers)
        # A repository without a README is still summarizable from its description.
        if readme_response.status_code != 404:
            readme_response.raise_for_status()
            encoded = readme_response.json().get("content") or ""
            readme = base64.b64decode(encoded).decode("utf-8", errors="replace")

        return f"{description} {readme}".strip()

# --- Provider ---

class SummaryProvider:
    """
    Dispatches summarization on the source name. Register a new SourceStrategy
    to support another source; everything else returns an empty summary.
    """

    def __init__(
        self,
        generate: Optional[Callable[[str], str]] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self._generate = generate or llm_service.generate_summary
        self._http_client = http_client
        self._strategies: Dict[SourceName, SourceStrategy] = {}

    def register(self, strategy: SourceStrategy) -> None:
        self._strategies[strategy.source] = strategy

    def supports(self, source: Union[SourceName, str, None]) -> bool:
        try:
            return SourceName(source) in self._strategies
        except ValueError:
            return False

    @property
    def http_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=settings.METADATA_TIMEOUT_SECONDS, follow_redirects=True)
        return self._http_client

    def summarize(self, source: Union[SourceName, str], link: str) -> str:
        """
        Returns generated summary text, or "" for sources without a strategy.
        Raises InvalidLinkFormat when the link does not fit the source and
        SummaryGenerationFailed when the metadata fetch or the LLM call fails.
        """
        if not self.supports(source):
            return ""
        strategy = self._strategies[SourceName(source)]
        source_name = strategy.source.value

        try:
            text = strategy.fetch_text(self.http_client, link)
        except InvalidLinkFormat:
            raise
        except Exception as e:
            raise SummaryGenerationFailed(source_name, link, f"metadata fetch failed: {e}") from e

        if not text:
            raise SummaryGenerationFailed(source_name, link, "no text to summarize")

        try:
            return self._generate(text)
        except Exception as e:
            raise SummaryGenerationFailed(source_name, link, f"generation failed: {e}") from e

    def try_summarize(self, source: Union[SourceName, str, None], link: str) -> SummaryOutcome:
        """Never raises: failures come back as SummarizationSkipped with the reason."""
        if not source or not self.supports(source):
            return SummarizationSkipped(reason=f"no summary strategy for source '{getattr(source, 'value', source)}'")
        try:
            text = self.summarize(source, link)
        except SummaryError as e:
            logger.warning("summary.generation_failed", source=str(getattr(source, "value", source)), link=link, reason=str(e))
            return SummarizationSkipped(reason=str(e))
        if not text:
            return SummarizationSkipped(reason="empty summary")
        return Summarized(text=text)

    def close(self) -> None:
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None


def build_default_provider(**kwargs) -> SummaryProvider:
    provider = SummaryProvider(**kwargs)
    for strategy in (YouTubeStrategy(), TwitterStrategy(), GitHubStrategy()):
        provider.register(strategy)
    return provider

_default_provider: Optional[SummaryProvider] = None

def get_summary_provider() -> SummaryProvider:
    global _default_provider
    if _default_provider is None:
        _default_provider = build_default_provider()
    return _default_provider
