from datetime import datetime

from src.discovery.domain.models import ArticleRef, JournalIdentity, PageMetadata, VolumeRef
from src.discovery.domain.url_codec import (
    article_path_for,
    encode_article_path,
    encode_volume_path,
    resolve_volume_number,
)

TITLE_MAX_LENGTH = 55
DESCRIPTION_MAX_LENGTH = 155
DEFAULT_KEYWORDS: tuple[str, ...] = ("medical research", "healthcare", "peer-reviewed")
VOLUME_KEYWORDS: tuple[str, ...] = ("medical journal", "healthcare research", "peer-reviewed articles")


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


def build_article_metadata(
    article: ArticleRef,
    base_url: str,
    journal: JournalIdentity | None = None,
) -> PageMetadata:
    journal = journal or JournalIdentity()
    volume_number = resolve_volume_number(article.volume)
    canonical_url = f"{base_url.rstrip('/')}{article_path_for(article)}"

    title = f"{truncate_text(article.title, TITLE_MAX_LENGTH)} | {journal.abbrev}"
    if article.abstract:
        description = truncate_text(article.abstract, DESCRIPTION_MAX_LENGTH)
    else:
        description = (
            f"Read this research article published in {journal.name} ({journal.abbrev}), "
            f"Volume {volume_number}."
        )

    keywords = (
        *article.keywords,
        *DEFAULT_KEYWORDS,
        journal.abbrev,
        f"Volume {volume_number}",
    )
    return PageMetadata(
        title=title,
        description=description,
        canonical_url=canonical_url,
        page_type="article",
        keywords=keywords,
        published_time=_isoformat(article.published_at),
        author_names=tuple(author.display_name for author in article.authors),
        dublin_core=build_dublin_core(article, journal),
        highwire_press=build_highwire_press(article, journal),
    )


def build_dublin_core(article: ArticleRef, journal: JournalIdentity) -> dict[str, str]:
    volume_number = resolve_volume_number(article.volume)
    return {
        "DC.title": article.title,
        "DC.creator": "; ".join(author.citation_name for author in article.authors),
        "DC.subject": "; ".join(article.keywords),
        "DC.description": article.abstract,
        "DC.publisher": journal.name,
        "DC.date": _date_only(article.published_at),
        "DC.type": "Text",
        "DC.format": "text/html",
        "DC.identifier": article.doi or f"{journal.abbrev}.{volume_number}.{article.article_number}",
        "DC.language": "en",
        "DC.rights": f"Copyright (c) {journal.name}",
    }


def build_highwire_press(article: ArticleRef, journal: JournalIdentity) -> dict[str, str]:
    """Highwire Press ``citation_*`` tags read by Google Scholar and PubMed."""
    published = _date_only(article.published_at)
    tags = {
        "citation_title": article.title,
        "citation_journal_title": journal.name,
        "citation_journal_abbrev": journal.abbrev,
        "citation_publisher": journal.name,
        "citation_volume": str(resolve_volume_number(article.volume)),
        "citation_publication_date": published,
        "citation_online_date": published,
        "citation_year": str(article.published_at.year) if article.published_at else "",
        "citation_language": "en",
        "citation_abstract": article.abstract,
    }
    if article.doi:
        tags["citation_doi"] = article.doi
    if article.article_number:
        tags["citation_firstpage"] = article.article_number
    if article.pdf_url:
        tags["citation_pdf_url"] = article.pdf_url
    for index, author in enumerate(article.authors):
        tags[f"citation_author_{index}"] = author.citation_name
        if author.affiliation:
            tags[f"citation_author_institution_{index}"] = author.affiliation
        if author.orcid:
            tags[f"citation_author_orcid_{index}"] = author.orcid
    for index, keyword in enumerate(article.keywords):
        tags[f"citation_keyword_{index}"] = keyword
    return tags


def build_volume_metadata(
    volume: VolumeRef,
    base_url: str,
    journal: JournalIdentity | None = None,
) -> PageMetadata:
    journal = journal or JournalIdentity()
    heading = volume.title or f"Volume {volume.number}"
    return PageMetadata(
        title=f"{heading} | {journal.abbrev}",
        description=volume.description or _volume_description(volume.number, journal),
        canonical_url=f"{base_url.rstrip('/')}{encode_volume_path(volume.number)}",
        page_type="website",
        keywords=(*VOLUME_KEYWORDS, journal.abbrev, f"Volume {volume.number}"),
        published_time=_isoformat(volume.published_at),
    )


def default_article_metadata(
    volume_number: int,
    article_number: str,
    base_url: str,
    journal: JournalIdentity | None = None,
) -> PageMetadata:
    journal = journal or JournalIdentity()
    return PageMetadata(
        title=f"Article {article_number} - Volume {volume_number} | {journal.abbrev}",
        description=(
            f"Read this research article from Volume {volume_number} of "
            f"{journal.name} ({journal.abbrev})."
        ),
        canonical_url=f"{base_url.rstrip('/')}{encode_article_path(volume_number, article_number)}",
        page_type="article",
    )


def default_volume_metadata(
    volume_number: int,
    base_url: str,
    journal: JournalIdentity | None = None,
) -> PageMetadata:
    journal = journal or JournalIdentity()
    return PageMetadata(
        title=f"Volume {volume_number} | {journal.abbrev}",
        description=_volume_description(volume_number, journal),
        canonical_url=f"{base_url.rstrip('/')}{encode_volume_path(volume_number)}",
        page_type="website",
    )


def _volume_description(volume_number: int, journal: JournalIdentity) -> str:
    return f"Browse all articles published in Volume {volume_number} of {journal.name} ({journal.abbrev})."


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _date_only(value: datetime | None) -> str:
    return value.date().isoformat() if value is not None else ""
