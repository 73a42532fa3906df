import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable

import aiohttp
from src.config.logger_config import logger

from src.discovery.application.ports import ContentSourcePort
from src.discovery.domain.models import (
    ArticleRef,
    ChangeFrequency,
    FetchOutcome,
    SitemapEntry,
    VolumeRef,
)
from src.discovery.domain.url_codec import article_path_for, encode_volume_path

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class StaticPage:
    path: str
    change_frequency: ChangeFrequency
    priority: float


STATIC_PAGES: tuple[StaticPage, ...] = (
    StaticPage("", ChangeFrequency.DAILY, 1.0),
    StaticPage("/articles", ChangeFrequency.DAILY, 0.9),
    StaticPage("/volumes", ChangeFrequency.WEEKLY, 0.8),
    StaticPage("/about", ChangeFrequency.MONTHLY, 0.7),
    StaticPage("/contact", ChangeFrequency.MONTHLY, 0.6),
    StaticPage("/guidelines", ChangeFrequency.MONTHLY, 0.7),
    StaticPage("/editorial-board", ChangeFrequency.MONTHLY, 0.6),
    StaticPage("/masthead", ChangeFrequency.MONTHLY, 0.5),
)

ARTICLE_CHANGE_FREQUENCY = ChangeFrequency.MONTHLY
ARTICLE_PRIORITY = 0.8
VOLUME_CHANGE_FREQUENCY = ChangeFrequency.WEEKLY
VOLUME_PRIORITY = 0.7


@dataclass(frozen=True)
class SitemapWorkflowConfig:
    connector_limit_per_host: int = 4
    connector_ttl_dns_cache: int = 300


class SitemapWorkflow:
    """Static pages, then articles, then volumes; upstream order kept within each group."""

    def __init__(
        self,
        content_source: ContentSourcePort,
        site_url: str,
        config: SitemapWorkflowConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.content_source = content_source
        self.site_url = site_url.rstrip("/")
        self.config = config or SitemapWorkflowConfig()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def run(self) -> list[SitemapEntry]:
        entries: list[SitemapEntry] = []
        try:
            generated_at = self._clock()
            entries.extend(self.static_entries(generated_at))

            connector = aiohttp.TCPConnector(
                limit_per_host=self.config.connector_limit_per_host,
                ttl_dns_cache=self.config.connector_ttl_dns_cache,
            )
            async with aiohttp.ClientSession(connector=connector) as session:
                articles, volumes = await asyncio.gather(
                    self._collect("articles", self.content_source.fetch_published_articles(session)),
                    self._collect("volumes", self.content_source.fetch_volumes(session)),
                )

            for article in articles.items:
                entries.append(self.article_entry(article, generated_at))
            for volume in volumes.items:
                entries.append(self.volume_entry(volume, generated_at))

            logger.info(
                "Sitemap built with {} entries (articles: {}, volumes: {})",
                len(entries),
                len(articles.items),
                len(volumes.items),
            )
        except Exception as exc:
            logger.exception(
                "Sitemap build aborted with error type {}: {}. Returning {} entries.",
                type(exc).__name__,
                exc,
                len(entries),
            )
        return entries

    def static_entries(self, generated_at: datetime) -> list[SitemapEntry]:
        return [
            SitemapEntry(
                url=f"{self.site_url}{page.path}",
                last_modified=generated_at,
                change_frequency=page.change_frequency,
                priority=page.priority,
            )
            for page in STATIC_PAGES
        ]

    def article_entry(self, article: ArticleRef, generated_at: datetime) -> SitemapEntry:
        return SitemapEntry(
            url=f"{self.site_url}{article_path_for(article)}",
            last_modified=article.last_modified or article.published_at or generated_at,
            change_frequency=ARTICLE_CHANGE_FREQUENCY,
            priority=ARTICLE_PRIORITY,
        )

    def volume_entry(self, volume: VolumeRef, generated_at: datetime) -> SitemapEntry:
        return SitemapEntry(
            url=f"{self.site_url}{encode_volume_path(volume.number)}",
            last_modified=volume.last_modified or volume.published_at or generated_at,
            change_frequency=VOLUME_CHANGE_FREQUENCY,
            priority=VOLUME_PRIORITY,
        )

    @staticmethod
    async def _collect(source: str, fetch: Awaitable[FetchOutcome]) -> FetchOutcome:
        try:
            outcome = await fetch
        except Exception as exc:
            outcome = FetchOutcome.failure(source, f"{type(exc).__name__}: {exc}")
        if not outcome.ok:
            logger.warning("Skipping {} in sitemap: {}", source, outcome.error)
        return outcome
