from typing import Iterable
from xml.sax.saxutils import escape

from src.discovery.domain.models import CrawlerRuleSet, SitemapEntry

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


def render_sitemap_xml(entries: Iterable[SitemapEntry]) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<urlset xmlns="{SITEMAP_NAMESPACE}">',
    ]
    for entry in entries:
        lines.extend(
            [
                "  <url>",
                f"    <loc>{escape(entry.url)}</loc>",
                f"    <lastmod>{entry.last_modified.isoformat()}</lastmod>",
                f"    <changefreq>{entry.change_frequency.value}</changefreq>",
                f"    <priority>{entry.priority:.1f}</priority>",
                "  </url>",
            ]
        )
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def render_robots_txt(rule_set: CrawlerRuleSet) -> str:
    blocks = []
    for rule in rule_set.rules:
        lines = [f"User-Agent: {agent}" for agent in rule.user_agents]
        lines.extend(f"Allow: {path}" for path in rule.allow)
        lines.extend(f"Disallow: {path}" for path in rule.disallow)
        blocks.append("\n".join(lines))
    blocks.append(f"Sitemap: {rule_set.sitemap}")
    return "\n\n".join(blocks) + "\n"
