import asyncio
import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import aiohttp
from aiohttp import ClientError, ContentTypeError
from src.config.logger_config import logger

from src.discovery.domain.models import ArticleRef, Author, FetchOutcome, VolumeRef
from src.discovery.domain.url_codec import coerce_volume, format_article_number

API_PREFIX = "/api/v1"


class ContentApiClient:
    """Read-only client for the journal backend's article and volume endpoints.

    Every public method returns a ``FetchOutcome``; transport errors, non-2xx
    statuses and undecodable bodies become failed outcomes instead of raising.
    There is no retry: a failed fetch is final for the caller's build.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout_seconds: float = 10.0,
        revalidate_seconds: int = 3600,
        article_limit: int = 1000,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.revalidate_seconds = revalidate_seconds
        self.article_limit = article_limit

    async def fetch_published_articles(self, session: aiohttp.ClientSession) -> FetchOutcome[ArticleRef]:
        source = "articles"
        payload, error = await self._fetch(
            session,
            "/articles/published",
            params={"limit": str(self.article_limit)},
            operation="fetch_published_articles",
        )
        if error is not None:
            return FetchOutcome.failure(source, error)

        raw_articles = _listing(payload, "articles")
        if raw_articles is None:
            return FetchOutcome.failure(source, f"Unexpected payload shape for {source}")

        articles = _parse_records(raw_articles, parse_article, "article")
        logger.info("Fetched {} published articles", len(articles))
        return FetchOutcome.success(source, articles)

    async def fetch_volumes(self, session: aiohttp.ClientSession) -> FetchOutcome[VolumeRef]:
        source = "volumes"
        payload, error = await self._fetch(session, "/volumes", operation="fetch_volumes")
        if error is not None:
            return FetchOutcome.failure(source, error)

        raw_volumes = _listing(payload, "volumes")
        if raw_volumes is None:
            return FetchOutcome.failure(source, f"Unexpected payload shape for {source}")

        volumes = _parse_records(raw_volumes, parse_volume, "volume")
        logger.info("Fetched {} volumes", len(volumes))
        return FetchOutcome.success(source, volumes)

    async def fetch_article(
        self,
        session: aiohttp.ClientSession,
        volume_number: int,
        article_number: str,
    ) -> FetchOutcome[ArticleRef]:
        source = "article"
        payload, error = await self._fetch(
            session,
            f"/articles/volume/{volume_number}/article/{quote(article_number, safe='')}",
            operation="fetch_article",
        )
        if error is not None:
            return FetchOutcome.failure(source, error)
        articles = _parse_records([payload], parse_article, "article")
        if not articles:
            return FetchOutcome.failure(source, "Malformed article payload")
        return FetchOutcome.success(source, articles)

    async def fetch_volume(self, session: aiohttp.ClientSession, volume_number: int) -> FetchOutcome[VolumeRef]:
        source = "volume"
        payload, error = await self._fetch(
            session,
            f"/volumes/number/{volume_number}",
            operation="fetch_volume",
        )
        if error is not None:
            return FetchOutcome.failure(source, error)
        volumes = _parse_records([payload], parse_volume, "volume")
        if not volumes:
            return FetchOutcome.failure(source, "Malformed volume payload")
        return FetchOutcome.success(source, volumes)

    def endpoint(self, path: str) -> str:
        return f"{self.base_url}{API_PREFIX}{path}"

    async def _fetch(
        self,
        session: aiohttp.ClientSession,
        path: str,
        params: dict[str, str] | None = None,
        *,
        operation: str,
    ) -> tuple[Any, str | None]:
        url = self.endpoint(path)
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        headers = {
            "Accept": "application/json",
            "Cache-Control": f"max-age={self.revalidate_seconds}",
        }
        try:
            async with session.get(url, params=params, headers=headers, timeout=timeout) as resp:
                if resp.status < 200 or resp.status >= 300:
                    body = await resp.text()
                    logger.error("{} failed with HTTP {}: {}", operation, resp.status, body[:200])
                    return None, f"HTTP {resp.status}"
                try:
                    data = await resp.json()
                except (ContentTypeError, json.JSONDecodeError, ValueError) as exc:
                    logger.error("{} returned an undecodable body: {}", operation, exc)
                    return None, f"{type(exc).__name__}: {exc}"
                return data, None
        except asyncio.TimeoutError:
            logger.error("{} timed out after {}s", operation, self.timeout_seconds)
            return None, f"Timeout after {self.timeout_seconds}s"
        except ClientError as exc:
            logger.error("{} failed: {}", operation, exc)
            return None, f"{type(exc).__name__}: {exc}"


def _listing(payload: Any, key: str) -> list | None:
    """Return the record list of a listing body, or ``None`` if it has none."""
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, Mapping):
        return None
    records = payload.get(key)
    if records is None:
        return []
    return records if isinstance(records, list) else None


def _parse_records(raw_records: list, parser, label: str) -> list:
    parsed = []
    for raw in raw_records:
        try:
            record = parser(raw)
        except (TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping malformed {} record {!r}: {}", label, raw, exc)
            continue
        if record is None:
            logger.warning("Skipping malformed {} record: {}", label, raw)
            continue
        parsed.append(record)
    return parsed


def parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Ignoring unparseable timestamp {!r}", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_article(payload: Any) -> ArticleRef | None:
    if not isinstance(payload, Mapping):
        return None
    article_number = str(payload.get("articleNumber") or "").strip() or format_article_number(0)
    manuscript = payload.get("manuscriptFile")
    pdf_url = manuscript.get("url") if isinstance(manuscript, Mapping) else None
    return ArticleRef(
        id=str(payload.get("_id") or payload.get("id") or ""),
        volume=coerce_volume(payload.get("volume")),
        article_number=article_number,
        last_modified=parse_timestamp(payload.get("updatedAt")),
        published_at=parse_timestamp(payload.get("publishedDate")),
        title=str(payload.get("title") or ""),
        abstract=str(payload.get("abstract") or ""),
        authors=tuple(_parse_authors(payload.get("authors"))),
        keywords=tuple(_parse_keywords(payload.get("keywords"))),
        doi=payload.get("doi") or None,
        pdf_url=pdf_url or None,
    )


def parse_volume(payload: Any) -> VolumeRef | None:
    if not isinstance(payload, Mapping):
        return None
    variant = coerce_volume(payload)
    if variant is None:
        return None
    return VolumeRef(
        id=str(payload.get("_id") or payload.get("id") or ""),
        number=variant.volume.number,
        last_modified=parse_timestamp(payload.get("updatedAt")),
        published_at=parse_timestamp(payload.get("publishDate") or payload.get("publishedDate")),
        title=payload.get("title") or None,
        description=payload.get("description") or None,
    )


def _parse_keywords(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [str(item).strip() for item in raw if str(item).strip()]


def _parse_authors(raw: Any) -> list[Author]:
    if not isinstance(raw, list):
        return []
    authors = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        first_name = str(item.get("firstName") or "").strip()
        last_name = str(item.get("lastName") or "").strip()
        if not first_name and not last_name:
            continue
        authors.append(
            Author(
                first_name=first_name,
                last_name=last_name,
                affiliation=item.get("affiliation") or None,
                orcid=item.get("orcid") or None,
                email=item.get("email") or None,
            )
        )
    return authors
