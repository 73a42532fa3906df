import re

from src.discovery.domain.models import RouteClass

HOME_ROUTE = "/"

# Prefix matched: "/articles" also covers "/articles/42".
PUBLIC_ROUTE_PREFIXES: tuple[str, ...] = (
    "/auth/login",
    "/auth/signup",
    "/auth/register",
    "/auth/forgot-password",
    "/contact",
    "/about",
    "/terms",
    "/privacy",
    "/articles",
    "/vol",
    "/editorial-board",
    "/masthead",
    "/guidelines",
    "/sitemap.xml",
    "/robots.txt",
)

# Paths the edge pipeline never hands to the classifier. Prefix match with no
# segment boundary, so "/apis" and "/favicon.ico.png" are excluded too.
EDGE_EXCLUDED_PATTERN = re.compile(r"^/(api|_next/static|_next/image|favicon\.ico)")


def classify_path(path: str) -> RouteClass:
    if path == HOME_ROUTE:
        return RouteClass.PUBLIC
    if any(path.startswith(prefix) for prefix in PUBLIC_ROUTE_PREFIXES):
        return RouteClass.PUBLIC
    return RouteClass.PROTECTED


def is_edge_excluded(path: str) -> bool:
    return EDGE_EXCLUDED_PATTERN.match(path) is not None


def requires_session_guard(path: str) -> bool:
    """Advisory: should the edge defer this path to the session-aware guard."""
    if is_edge_excluded(path):
        return False
    return classify_path(path) is RouteClass.PROTECTED
