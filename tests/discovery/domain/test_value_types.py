import unittest
from datetime import datetime, timezone

from src.discovery.domain.models import ChangeFrequency, FetchOutcome, SitemapEntry


class SitemapEntryTests(unittest.TestCase):
    def test_priority_must_be_in_unit_interval(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        SitemapEntry("https://a.test", now, ChangeFrequency.DAILY, 0.0)
        SitemapEntry("https://a.test", now, ChangeFrequency.DAILY, 1.0)
        with self.assertRaises(ValueError):
            SitemapEntry("https://a.test", now, ChangeFrequency.DAILY, 1.5)


class FetchOutcomeTests(unittest.TestCase):
    def test_success_and_failure(self):
        ok = FetchOutcome.success("volumes", [1, 2])
        self.assertTrue(ok.ok)
        self.assertEqual(ok.items, (1, 2))

        failed = FetchOutcome.failure("articles", "HTTP 500")
        self.assertFalse(failed.ok)
        self.assertEqual(failed.items, ())
        self.assertEqual(failed.error, "HTTP 500")
