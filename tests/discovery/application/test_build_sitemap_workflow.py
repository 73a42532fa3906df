import asyncio
import unittest
from datetime import datetime, timezone
from urllib.parse import urlsplit

from src.discovery.application.workflows.build_sitemap import STATIC_PAGES, SitemapWorkflow
from src.discovery.domain.models import (
    ArticleRef,
    ChangeFrequency,
    EmbeddedVolume,
    FetchOutcome,
    RawVolume,
    RouteClass,
    VolumeRef,
)
from src.discovery.domain.routes import classify_path

BASE = "https://journal.test"
GENERATED_AT = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
UPDATED_AT = datetime(2024, 4, 1, tzinfo=timezone.utc)
PUBLISHED_AT = datetime(2024, 3, 1, tzinfo=timezone.utc)


class FakeContentSource:
    def __init__(self, articles=None, volumes=None, articles_error=None, volumes_error=None):
        self.articles = articles or []
        self.volumes = volumes or []
        self.articles_error = articles_error
        self.volumes_error = volumes_error
        self.calls: list[str] = []

    async def fetch_published_articles(self, _session):
        self.calls.append("articles")
        if isinstance(self.articles_error, Exception):
            raise self.articles_error
        if self.articles_error:
            return FetchOutcome.failure("articles", self.articles_error)
        return FetchOutcome.success("articles", self.articles)

    async def fetch_volumes(self, _session):
        self.calls.append("volumes")
        if isinstance(self.volumes_error, Exception):
            raise self.volumes_error
        if self.volumes_error:
            return FetchOutcome.failure("volumes", self.volumes_error)
        return FetchOutcome.success("volumes", self.volumes)


def make_workflow(source: FakeContentSource) -> SitemapWorkflow:
    return SitemapWorkflow(content_source=source, site_url=BASE + "/", clock=lambda: GENERATED_AT)


class SitemapWorkflowTests(unittest.IsolatedAsyncioTestCase):
    async def test_static_entries_come_first_with_fixed_priorities(self):
        entries = await make_workflow(FakeContentSource()).run()

        self.assertEqual(len(entries), len(STATIC_PAGES))
        self.assertEqual(entries[0].url, BASE)
        self.assertEqual(entries[0].priority, 1.0)
        self.assertEqual(entries[-1].url, f"{BASE}/masthead")
        self.assertEqual(entries[-1].priority, 0.5)
        self.assertTrue(all(entry.last_modified == GENERATED_AT for entry in entries))

    async def test_static_paths_are_public_routes(self):
        entries = await make_workflow(FakeContentSource()).run()
        for entry in entries:
            path = urlsplit(entry.url).path or "/"
            with self.subTest(path=path):
                self.assertEqual(classify_path(path), RouteClass.PUBLIC)

    async def test_article_entry_uses_canonical_path_and_update_time(self):
        article = ArticleRef(
            id="a1",
            volume=EmbeddedVolume(VolumeRef(id="v2", number=2)),
            article_number="003",
            last_modified=UPDATED_AT,
            published_at=PUBLISHED_AT,
        )
        entries = await make_workflow(FakeContentSource(articles=[article])).run()

        entry = entries[len(STATIC_PAGES)]
        self.assertEqual(entry.url, f"{BASE}/vol/2/article003")
        self.assertEqual(entry.last_modified, UPDATED_AT)
        self.assertEqual(entry.change_frequency, ChangeFrequency.MONTHLY)
        self.assertEqual(entry.priority, 0.8)

    async def test_last_modified_fallback_chain(self):
        articles = [
            ArticleRef(id="a1", volume=RawVolume(1), article_number="001", published_at=PUBLISHED_AT),
            ArticleRef(id="a2", volume=None, article_number="002"),
        ]
        volumes = [VolumeRef(id="v1", number=1, published_at=PUBLISHED_AT), VolumeRef(id="v2", number=2)]
        entries = await make_workflow(FakeContentSource(articles=articles, volumes=volumes)).run()

        dynamic = entries[len(STATIC_PAGES):]
        self.assertEqual([e.last_modified for e in dynamic], [PUBLISHED_AT, GENERATED_AT, PUBLISHED_AT, GENERATED_AT])
        self.assertEqual(dynamic[1].url, f"{BASE}/vol/1/article002")

    async def test_groups_keep_upstream_order(self):
        articles = [
            ArticleRef(id="a", volume=RawVolume(3), article_number="010"),
            ArticleRef(id="b", volume=RawVolume(1), article_number="002"),
        ]
        volumes = [VolumeRef(id="v3", number=3), VolumeRef(id="v1", number=1)]
        entries = await make_workflow(FakeContentSource(articles=articles, volumes=volumes)).run()

        self.assertEqual(
            [e.url for e in entries[len(STATIC_PAGES):]],
            [f"{BASE}/vol/3/article010", f"{BASE}/vol/1/article002", f"{BASE}/vol/3", f"{BASE}/vol/1"],
        )
        self.assertEqual(entries[-1].change_frequency, ChangeFrequency.WEEKLY)
        self.assertEqual(entries[-1].priority, 0.7)

    async def test_article_fetch_timeout_keeps_static_and_volumes(self):
        volumes = [VolumeRef(id="v1", number=1), VolumeRef(id="v2", number=2)]
        source = FakeContentSource(volumes=volumes, articles_error=asyncio.TimeoutError())

        entries = await make_workflow(source).run()

        self.assertEqual(len(entries), len(STATIC_PAGES) + 2)
        self.assertEqual([e.url for e in entries[-2:]], [f"{BASE}/vol/1", f"{BASE}/vol/2"])
        self.assertFalse(any("/article" in e.url for e in entries))
        self.assertEqual(sorted(source.calls), ["articles", "volumes"])

    async def test_volume_failure_keeps_articles(self):
        articles = [ArticleRef(id="a1", volume=RawVolume(1), article_number="001")]
        source = FakeContentSource(articles=articles, volumes_error="HTTP 500")

        entries = await make_workflow(source).run()

        self.assertEqual(len(entries), len(STATIC_PAGES) + 1)
        self.assertEqual(entries[-1].url, f"{BASE}/vol/1/article001")

    async def test_both_sources_failing_returns_static_entries(self):
        source = FakeContentSource(articles_error=RuntimeError("boom"), volumes_error="HTTP 502")
        entries = await make_workflow(source).run()
        self.assertEqual(len(entries), len(STATIC_PAGES))

    async def test_unexpected_failure_returns_partial_listing(self):
        class BrokenArticle:
            id = "broken"

        source = FakeContentSource(
            articles=[ArticleRef(id="a1", volume=RawVolume(1), article_number="001"), BrokenArticle()],
            volumes=[VolumeRef(id="v1", number=1)],
        )

        entries = await make_workflow(source).run()

        self.assertEqual(len(entries), len(STATIC_PAGES) + 1)
        self.assertEqual(entries[-1].url, f"{BASE}/vol/1/article001")

    async def test_clock_failure_returns_empty_listing(self):
        def broken_clock():
            raise RuntimeError("clock unavailable")

        workflow = SitemapWorkflow(content_source=FakeContentSource(), site_url=BASE, clock=broken_clock)
        self.assertEqual(await workflow.run(), [])
