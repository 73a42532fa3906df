from typing import Protocol, runtime_checkable

import aiohttp

from src.discovery.domain.models import ArticleRef, FetchOutcome, VolumeRef


@runtime_checkable
class ContentSourcePort(Protocol):
    async def fetch_published_articles(self, session: aiohttp.ClientSession) -> FetchOutcome[ArticleRef]: ...
    """List published articles in upstream order."""

    async def fetch_volumes(self, session: aiohttp.ClientSession) -> FetchOutcome[VolumeRef]: ...
    """List volumes in upstream order."""

    async def fetch_article(
        self,
        session: aiohttp.ClientSession,
        volume_number: int,
        article_number: str,
    ) -> FetchOutcome[ArticleRef]: ...
    """Load one article by its canonical coordinates."""

    async def fetch_volume(self, session: aiohttp.ClientSession, volume_number: int) -> FetchOutcome[VolumeRef]: ...
    """Load one volume by number."""
