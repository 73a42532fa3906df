from __future__ import annotations
import asyncio
from pathlib import Path
from urllib.parse import urlsplit

import aiohttp

from src.config.logger_config import logger
from src.config.settings import SiteSettings, load_site_settings
from src.discovery.application.use_cases.resolve_page_metadata import (
    ResolvePageMetadataCommand,
    ResolvePageMetadataUseCase,
)
from src.discovery.application.workflows.build_sitemap import SitemapWorkflow, SitemapWorkflowConfig
from src.discovery.domain.models import (
    CrawlerRuleSet,
    JournalIdentity,
    PageMetadata,
    SiteFilesSummary,
    SitemapEntry,
)
from src.discovery.domain.robots import build_crawler_rules
from src.discovery.domain.url_codec import decode_article_path, decode_volume_path
from src.discovery.infrastructure.content_api import ContentApiClient
from src.discovery.infrastructure.renderers import render_robots_txt, render_sitemap_xml


DEFAULT_OUTPUT_DIR = Path("artifacts/site")
SITEMAP_FILENAME = "sitemap.xml"
ROBOTS_FILENAME = "robots.txt"


def build_content_client(settings: SiteSettings) -> ContentApiClient:
    return ContentApiClient(
        base_url=settings.api_url,
        timeout_seconds=settings.request_timeout_seconds,
        revalidate_seconds=settings.revalidate_seconds,
        article_limit=settings.article_limit,
    )


def journal_identity(settings: SiteSettings) -> JournalIdentity:
    return JournalIdentity(name=settings.journal_name, abbrev=settings.journal_abbrev)


async def build_sitemap_async(
    *,
    settings: SiteSettings | None = None,
    workflow_config: SitemapWorkflowConfig | None = None,
) -> list[SitemapEntry]:
    settings = settings or load_site_settings()
    workflow = SitemapWorkflow(
        content_source=build_content_client(settings),
        site_url=settings.site_url,
        config=workflow_config,
    )
    return await workflow.run()


def build_sitemap(
    *,
    settings: SiteSettings | None = None,
    workflow_config: SitemapWorkflowConfig | None = None,
) -> list[SitemapEntry]:
    return asyncio.run(build_sitemap_async(settings=settings, workflow_config=workflow_config))


def build_robots(*, settings: SiteSettings | None = None) -> CrawlerRuleSet:
    settings = settings or load_site_settings()
    return build_crawler_rules(settings.site_url)


async def resolve_page_metadata_async(
    path: str,
    *,
    settings: SiteSettings | None = None,
) -> PageMetadata | None:
    settings = settings or load_site_settings()
    use_case = ResolvePageMetadataUseCase(
        content_source=build_content_client(settings),
        site_url=settings.site_url,
        journal=journal_identity(settings),
    )
    return await use_case.execute(ResolvePageMetadataCommand(path=path))


def resolve_page_metadata(path: str, *, settings: SiteSettings | None = None) -> PageMetadata | None:
    return asyncio.run(resolve_page_metadata_async(path, settings=settings))


async def write_site_files_async(
    *,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
    settings: SiteSettings | None = None,
) -> SiteFilesSummary:
    settings = settings or load_site_settings()
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    entries = await build_sitemap_async(settings=settings)
    sitemap_path = output_path / SITEMAP_FILENAME
    sitemap_path.write_text(render_sitemap_xml(entries), encoding="utf-8")

    robots_path = output_path / ROBOTS_FILENAME
    robots_path.write_text(render_robots_txt(build_robots(settings=settings)), encoding="utf-8")

    paths = [urlsplit(entry.url).path for entry in entries]
    summary = SiteFilesSummary(
        sitemap_path=str(sitemap_path),
        robots_path=str(robots_path),
        sitemap_entries=len(entries),
        article_entries=sum(1 for path in paths if decode_article_path(path) is not None),
        volume_entries=sum(1 for path in paths if decode_volume_path(path) is not None),
    )
    logger.info("Wrote {} and {}", sitemap_path, robots_path)
    return summary


def write_site_files(
    *,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
    settings: SiteSettings | None = None,
) -> SiteFilesSummary:
    return asyncio.run(write_site_files_async(output_dir=output_dir, settings=settings))
