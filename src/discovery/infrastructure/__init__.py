"""Infrastructure adapters for site discovery."""

from src.discovery.infrastructure.content_api import ContentApiClient
from src.discovery.infrastructure.renderers import render_robots_txt, render_sitemap_xml

__all__ = ["ContentApiClient", "render_robots_txt", "render_sitemap_xml"]
