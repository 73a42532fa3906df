from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class JournalIdentity:
    name: str = "Advances in Medical & Health Sciences Journal"
    abbrev: str = "AMHSJ"


@dataclass(frozen=True)
class VolumeRef:
    id: str
    number: int
    last_modified: datetime | None = None
    published_at: datetime | None = None
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class EmbeddedVolume:
    volume: VolumeRef


@dataclass(frozen=True)
class RawVolume:
    number: int


VolumeVariant = Union[EmbeddedVolume, RawVolume]


@dataclass(frozen=True)
class Author:
    first_name: str
    last_name: str
    affiliation: str | None = None
    orcid: str | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def citation_name(self) -> str:
        return f"{self.last_name}, {self.first_name}"


@dataclass(frozen=True)
class ArticleRef:
    id: str
    volume: VolumeVariant | None
    article_number: str
    last_modified: datetime | None = None
    published_at: datetime | None = None
    title: str = ""
    abstract: str = ""
    authors: tuple[Author, ...] = field(default_factory=tuple)
    keywords: tuple[str, ...] = field(default_factory=tuple)
    doi: str | None = None
    pdf_url: str | None = None


@dataclass(frozen=True)
class ParsedArticlePath:
    volume_number: int
    article_number: str


class ChangeFrequency(str, Enum):
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    last_modified: datetime
    change_frequency: ChangeFrequency
    priority: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.priority <= 1.0:
            raise ValueError(f"Sitemap priority must be within [0, 1], got {self.priority}")


class RouteClass(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"


@dataclass(frozen=True)
class CrawlerRule:
    user_agents: tuple[str, ...]
    allow: tuple[str, ...]
    disallow: tuple[str, ...]


@dataclass(frozen=True)
class CrawlerRuleSet:
    rules: tuple[CrawlerRule, ...]
    sitemap: str


@dataclass(frozen=True)
class FetchOutcome(Generic[T]):
    """Result of one upstream fetch: items on success, a reason on failure."""

    source: str
    items: tuple[T, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, source: str, items) -> "FetchOutcome[T]":
        return cls(source=source, items=tuple(items))

    @classmethod
    def failure(cls, source: str, reason: str) -> "FetchOutcome[T]":
        return cls(source=source, error=reason)


@dataclass(frozen=True)
class PageMetadata:
    title: str
    description: str
    canonical_url: str
    page_type: str
    keywords: tuple[str, ...] = field(default_factory=tuple)
    published_time: str | None = None
    author_names: tuple[str, ...] = field(default_factory=tuple)
    dublin_core: dict[str, str] = field(default_factory=dict)
    highwire_press: dict[str, str] = field(default_factory=dict)

    def to_meta_tags(self) -> list[tuple[str, str]]:
        tags: list[tuple[str, str]] = [("description", self.description)]
        if self.keywords:
            tags.append(("keywords", ", ".join(self.keywords)))
        tags.append(("og:title", self.title))
        tags.append(("og:url", self.canonical_url))
        tags.append(("og:type", self.page_type))
        if self.published_time:
            tags.append(("article:published_time", self.published_time))
        # Empty citation values are omitted.
        tags.extend((key, value) for key, value in self.dublin_core.items() if value)
        tags.extend((key, value) for key, value in self.highwire_press.items() if value)
        return tags


@dataclass(frozen=True)
class SiteFilesSummary:
    sitemap_path: str
    robots_path: str
    sitemap_entries: int
    article_entries: int
    volume_entries: int
