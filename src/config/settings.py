# Site and content API configuration

import math
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SITE_URL = "https://amhsj.org"
DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_JOURNAL_NAME = "Advances in Medical & Health Sciences Journal"
DEFAULT_JOURNAL_ABBREV = "AMHSJ"
API_VERSION_SUFFIX = "/api/v1"


@dataclass(frozen=True)
class SiteSettings:
    site_url: str = DEFAULT_SITE_URL
    api_url: str = DEFAULT_API_URL
    request_timeout_seconds: float = 10.0
    revalidate_seconds: int = 3600
    article_limit: int = 1000
    journal_name: str = DEFAULT_JOURNAL_NAME
    journal_abbrev: str = DEFAULT_JOURNAL_ABBREV

    def __post_init__(self) -> None:
        object.__setattr__(self, "site_url", normalize_site_url(self.site_url))
        object.__setattr__(self, "api_url", normalize_api_base(self.api_url))


def normalize_site_url(raw: str) -> str:
    return raw.strip().rstrip("/")


def normalize_api_base(raw: str) -> str:
    """Reduce a configured API location to its origin.

    ``http://host/api/v1/`` and ``http://host`` both become ``http://host``;
    endpoint paths are appended by the client.
    """
    base = raw.strip().rstrip("/")
    if base.endswith(API_VERSION_SUFFIX):
        base = base[: -len(API_VERSION_SUFFIX)]
    return base


def load_site_settings() -> SiteSettings:
    return SiteSettings(
        site_url=os.getenv("SITE_URL") or DEFAULT_SITE_URL,
        api_url=os.getenv("API_URL") or DEFAULT_API_URL,
        request_timeout_seconds=_env_number("API_TIMEOUT_SECONDS", 10.0, float),
        revalidate_seconds=_env_number("SITEMAP_REVALIDATE_SECONDS", 3600, int),
        article_limit=_env_number("SITEMAP_ARTICLE_LIMIT", 1000, int),
        journal_name=os.getenv("JOURNAL_NAME") or DEFAULT_JOURNAL_NAME,
        journal_abbrev=os.getenv("JOURNAL_ABBREV") or DEFAULT_JOURNAL_ABBREV,
    )


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from exc
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value
