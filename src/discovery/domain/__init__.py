"""Domain models and deterministic rules for site discovery."""

from src.discovery.domain.models import (
    ArticleRef,
    ChangeFrequency,
    CrawlerRule,
    CrawlerRuleSet,
    EmbeddedVolume,
    FetchOutcome,
    PageMetadata,
    RawVolume,
    RouteClass,
    SitemapEntry,
    VolumeRef,
)
from src.discovery.domain.robots import build_crawler_rules
from src.discovery.domain.routes import classify_path, requires_session_guard
from src.discovery.domain.url_codec import (
    decode_article_path,
    decode_volume_path,
    encode_article_path,
    encode_volume_path,
    format_article_number,
    resolve_volume_number,
)

__all__ = [
    "ArticleRef",
    "build_crawler_rules",
    "ChangeFrequency",
    "classify_path",
    "CrawlerRule",
    "CrawlerRuleSet",
    "decode_article_path",
    "decode_volume_path",
    "EmbeddedVolume",
    "encode_article_path",
    "encode_volume_path",
    "FetchOutcome",
    "format_article_number",
    "PageMetadata",
    "RawVolume",
    "requires_session_guard",
    "resolve_volume_number",
    "RouteClass",
    "SitemapEntry",
    "VolumeRef",
]
