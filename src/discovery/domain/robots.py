from src.discovery.domain.models import CrawlerRule, CrawlerRuleSet

WILDCARD_AGENT = "*"
SCHOLAR_AGENT = "Googlebot-Scholar"
SEARCH_ENGINE_AGENTS: tuple[str, ...] = (
    "Googlebot",
    "Bingbot",
    "Slurp",
    "DuckDuckBot",
    "Baiduspider",
)

PUBLIC_CONTENT_PATHS: tuple[str, ...] = (
    "/",
    "/articles",
    "/vol/",
    "/volumes",
    "/about",
    "/contact",
    "/guidelines",
    "/editorial-board",
    "/masthead",
)
SCHOLAR_CONTENT_PATHS: tuple[str, ...] = ("/", "/vol/", "/articles")
PRIVATE_PATHS: tuple[str, ...] = ("/dashboard/*", "/auth/*", "/api/*")
INTERNAL_PATHS: tuple[str, ...] = ("/_next/*", "/admin/*")


def build_crawler_rules(base_url: str) -> CrawlerRuleSet:
    return CrawlerRuleSet(
        rules=(
            CrawlerRule(
                user_agents=(WILDCARD_AGENT,),
                allow=PUBLIC_CONTENT_PATHS,
                disallow=PRIVATE_PATHS + INTERNAL_PATHS,
            ),
            CrawlerRule(
                user_agents=(SCHOLAR_AGENT,),
                allow=SCHOLAR_CONTENT_PATHS,
                disallow=PRIVATE_PATHS,
            ),
            CrawlerRule(
                user_agents=SEARCH_ENGINE_AGENTS,
                allow=("/",),
                disallow=PRIVATE_PATHS,
            ),
        ),
        sitemap=f"{base_url.rstrip('/')}/sitemap.xml",
    )
