"""Site discovery package: canonical URLs, sitemap, crawler policy and page metadata."""

from src.discovery.domain.models import CrawlerRuleSet, PageMetadata, SiteFilesSummary, SitemapEntry

__all__ = [
    "CrawlerRuleSet",
    "PageMetadata",
    "SiteFilesSummary",
    "SitemapEntry",
]
