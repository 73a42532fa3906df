import re
from collections.abc import Mapping
from typing import Any

from src.discovery.domain.models import (
    ArticleRef,
    EmbeddedVolume,
    ParsedArticlePath,
    RawVolume,
    VolumeRef,
    VolumeVariant,
)

# ASCII digits only, anchored at the true end of the string. Greedy:
# everything after "article" belongs to the article number.
ARTICLE_PATH_PATTERN = re.compile(r"^/vol/([0-9]+)/article(.+)\Z")
VOLUME_PATH_PATTERN = re.compile(r"^/vol/([0-9]+)\Z")

ARTICLE_NUMBER_WIDTH = 3
DEFAULT_VOLUME_NUMBER = 1


def encode_article_path(volume_number: int, article_number: str) -> str:
    return f"/vol/{volume_number}/article{article_number}"


def encode_volume_path(volume_number: int) -> str:
    return f"/vol/{volume_number}"


def decode_article_path(path: str) -> ParsedArticlePath | None:
    """Parse ``/vol/{n}/article{number}``; ``None`` means the path is not an article path."""
    match = ARTICLE_PATH_PATTERN.match(path)
    if match is None:
        return None
    return ParsedArticlePath(
        volume_number=int(match.group(1), 10),
        article_number=match.group(2),
    )


def decode_volume_path(path: str) -> int | None:
    match = VOLUME_PATH_PATTERN.match(path)
    if match is None:
        return None
    return int(match.group(1), 10)


def format_article_number(index: int) -> str:
    """Turn a zero-based position into a display number: 0 -> "001", 999 -> "1000"."""
    if index < 0:
        raise ValueError(f"Article index must be non-negative, got {index}")
    return str(index + 1).zfill(ARTICLE_NUMBER_WIDTH)


def coerce_volume(value: Any) -> VolumeVariant | None:
    """Map a loosely-typed upstream volume value onto the tagged variant.

    Accepts an existing variant, a ``VolumeRef``, a bare integer, or a mapping
    carrying ``volume`` (preferred) or ``number``. Returns ``None`` when no
    usable volume number is present.
    """
    if isinstance(value, (EmbeddedVolume, RawVolume)):
        return value
    if isinstance(value, VolumeRef):
        return EmbeddedVolume(value)
    if isinstance(value, Mapping):
        number = _positive_int(value.get("volume")) or _positive_int(value.get("number"))
        if number is None:
            return None
        return EmbeddedVolume(
            VolumeRef(
                id=str(value.get("_id") or value.get("id") or ""),
                number=number,
                title=value.get("title") or None,
                description=value.get("description") or None,
            )
        )
    number = _positive_int(value)
    if number is None:
        return None
    return RawVolume(number)


def resolve_volume_number(volume_like: Any) -> int:
    variant = coerce_volume(volume_like)
    if isinstance(variant, EmbeddedVolume):
        return variant.volume.number
    if isinstance(variant, RawVolume):
        return variant.number
    return DEFAULT_VOLUME_NUMBER


def article_path_for(article: ArticleRef) -> str:
    article_number = article.article_number or format_article_number(0)
    return encode_article_path(resolve_volume_number(article.volume), article_number)


def _positive_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        # str.isdigit() also accepts superscripts and non-ASCII digits.
        if not (text.isascii() and text.isdecimal()):
            return None
        number = int(text, 10)
        return number if number > 0 else None
    return None
