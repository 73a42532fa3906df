from dataclasses import dataclass

import aiohttp
from src.config.logger_config import logger

from src.discovery.application.ports import ContentSourcePort
from src.discovery.domain.models import JournalIdentity, PageMetadata
from src.discovery.domain.seo import (
    build_article_metadata,
    build_volume_metadata,
    default_article_metadata,
    default_volume_metadata,
)
from src.discovery.domain.url_codec import decode_article_path, decode_volume_path


@dataclass(frozen=True)
class ResolvePageMetadataCommand:
    path: str


class ResolvePageMetadataUseCase:
    """Metadata for article and volume pages, falling back to defaults when the backend cannot answer."""

    def __init__(
        self,
        content_source: ContentSourcePort,
        site_url: str,
        journal: JournalIdentity | None = None,
    ) -> None:
        self.content_source = content_source
        self.site_url = site_url.rstrip("/")
        self.journal = journal or JournalIdentity()

    async def execute(self, command: ResolvePageMetadataCommand) -> PageMetadata | None:
        async with aiohttp.ClientSession() as session:
            return await self.for_path(session, command.path)

    async def for_path(self, session: aiohttp.ClientSession, path: str) -> PageMetadata | None:
        parsed = decode_article_path(path)
        if parsed is not None:
            return await self.for_article(session, parsed.volume_number, parsed.article_number)
        volume_number = decode_volume_path(path)
        if volume_number is not None:
            return await self.for_volume(session, volume_number)
        return None

    async def for_article(
        self,
        session: aiohttp.ClientSession,
        volume_number: int,
        article_number: str,
    ) -> PageMetadata:
        try:
            outcome = await self.content_source.fetch_article(session, volume_number, article_number)
            if outcome.ok and outcome.items:
                return build_article_metadata(outcome.items[0], self.site_url, self.journal)
            logger.warning(
                "Using default metadata for volume {} article {}: {}",
                volume_number,
                article_number,
                outcome.error or "empty response",
            )
        except Exception as exc:
            logger.exception("Error generating article metadata: {}", exc)
        return default_article_metadata(volume_number, article_number, self.site_url, self.journal)

    async def for_volume(self, session: aiohttp.ClientSession, volume_number: int) -> PageMetadata:
        try:
            outcome = await self.content_source.fetch_volume(session, volume_number)
            if outcome.ok and outcome.items:
                return build_volume_metadata(outcome.items[0], self.site_url, self.journal)
            logger.warning(
                "Using default metadata for volume {}: {}",
                volume_number,
                outcome.error or "empty response",
            )
        except Exception as exc:
            logger.exception("Error generating volume metadata: {}", exc)
        return default_volume_metadata(volume_number, self.site_url, self.journal)
