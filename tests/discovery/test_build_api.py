import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from src.config.settings import SiteSettings
from src.discovery.build import (
    build_robots,
    build_sitemap,
    build_sitemap_async,
    resolve_page_metadata_async,
    resolve_page_metadata,
    write_site_files,
)
from src.discovery.domain.models import ChangeFrequency, JournalIdentity, PageMetadata, SitemapEntry
from tests.utils.tempdir import managed_temp_dir

SETTINGS = SiteSettings(
    site_url="https://journal.test/",
    api_url="http://api.test/api/v1/",
    request_timeout_seconds=3,
    revalidate_seconds=600,
    article_limit=50,
)
STAMP = datetime(2024, 1, 1, tzinfo=timezone.utc)


class BuildApiTests(unittest.TestCase):
    def test_build_sitemap_sync_wrapper(self):
        expected = [SitemapEntry("https://journal.test", STAMP, ChangeFrequency.DAILY, 1.0)]
        with patch("src.discovery.build.build_sitemap_async", new=AsyncMock(return_value=expected)):
            result = build_sitemap(settings=SETTINGS)
        self.assertEqual(result, expected)

    def test_build_robots_uses_site_url(self):
        rules = build_robots(settings=SETTINGS)
        self.assertEqual(rules.sitemap, "https://journal.test/sitemap.xml")

    def test_resolve_page_metadata_sync_wrapper(self):
        expected = PageMetadata(
            title="Volume 1 | AMHSJ",
            description="d",
            canonical_url="https://journal.test/vol/1",
            page_type="website",
        )
        with patch("src.discovery.build.resolve_page_metadata_async", new=AsyncMock(return_value=expected)):
            result = resolve_page_metadata("/vol/1", settings=SETTINGS)
        self.assertEqual(result, expected)

    def test_write_site_files_writes_sitemap_and_robots(self):
        entries = [
            SitemapEntry("https://journal.test", STAMP, ChangeFrequency.DAILY, 1.0),
            SitemapEntry("https://journal.test/vol/2/article003", STAMP, ChangeFrequency.MONTHLY, 0.8),
            SitemapEntry("https://journal.test/vol/2", STAMP, ChangeFrequency.WEEKLY, 0.7),
        ]
        with managed_temp_dir("write_site_files") as tmp:
            with patch("src.discovery.build.build_sitemap_async", new=AsyncMock(return_value=entries)):
                summary = write_site_files(output_dir=tmp, settings=SETTINGS)

            self.assertEqual(summary.sitemap_entries, 3)
            self.assertEqual(summary.article_entries, 1)
            self.assertEqual(summary.volume_entries, 1)
            sitemap = Path(summary.sitemap_path).read_text(encoding="utf-8")
            robots = Path(summary.robots_path).read_text(encoding="utf-8")
            self.assertIn("<loc>https://journal.test/vol/2/article003</loc>", sitemap)
            self.assertTrue(robots.rstrip().endswith("Sitemap: https://journal.test/sitemap.xml"))


class BuildApiAsyncTests(unittest.IsolatedAsyncioTestCase):
    async def test_build_sitemap_async_wires_client_from_settings(self):
        workflow = MagicMock()
        workflow.run = AsyncMock(return_value=[])
        with (
            patch("src.discovery.build.ContentApiClient", return_value=MagicMock()) as client_ctor,
            patch("src.discovery.build.SitemapWorkflow", return_value=workflow) as workflow_ctor,
        ):
            result = await build_sitemap_async(settings=SETTINGS)

        self.assertEqual(result, [])
        client_ctor.assert_called_once_with(
            base_url="http://api.test",
            timeout_seconds=3,
            revalidate_seconds=600,
            article_limit=50,
        )
        self.assertEqual(workflow_ctor.call_args.kwargs["site_url"], "https://journal.test")
        workflow.run.assert_awaited_once()

    async def test_resolve_page_metadata_async_passes_journal_from_settings(self):
        settings = SiteSettings(site_url="https://journal.test", journal_name="Test Journal", journal_abbrev="TJ")
        use_case = MagicMock()
        use_case.execute = AsyncMock(return_value=None)
        with (
            patch("src.discovery.build.ContentApiClient", return_value=MagicMock()),
            patch("src.discovery.build.ResolvePageMetadataUseCase", return_value=use_case) as use_case_ctor,
        ):
            result = await resolve_page_metadata_async("/about", settings=settings)

        self.assertIsNone(result)
        self.assertEqual(use_case_ctor.call_args.kwargs["journal"], JournalIdentity(name="Test Journal", abbrev="TJ"))
        self.assertEqual(use_case.execute.await_args.args[0].path, "/about")
