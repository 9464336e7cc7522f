"""Wikipedia search and article text retrieval."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, List

import requests
from bs4 import BeautifulSoup

from plagscan.errors import SourceError
from plagscan.utils.text import collapse_whitespace

LOGGER = logging.getLogger(__name__)

ARTICLE_NOISE_SELECTORS = (
    "table, .mw-editsection, .reference, script, style, #toc, .hatnote, .thumb"
)
PAGE_NOISE_SELECTORS = "script, style, nav, footer, header, aside"


@dataclass(slots=True)
class SearchHit:
    title: str
    pageid: int
    snippet: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def html_to_text(html: str, noise_selectors: str = ARTICLE_NOISE_SELECTORS) -> str:
    """Strip noise elements from an HTML fragment and return its collapsed text."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.select(noise_selectors):
        tag.decompose()
    return collapse_whitespace(soup.get_text(separator=" "))


class WikipediaClient:
    """Thin client over the MediaWiki search and parse APIs."""

    def __init__(
        self,
        language: str = "vi",
        *,
        timeout: float = 10.0,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.language = language
        self.timeout = timeout
        self.session = session or requests.Session()
        if user_agent:
            self.session.headers["User-Agent"] = user_agent

    @property
    def api_url(self) -> str:
        return f"https://{self.language}.wikipedia.org/w/api.php"

    def page_url(self, pageid: int) -> str:
        return f"https://{self.language}.wikipedia.org/?curid={pageid}"

    def _get(self, params: dict[str, Any]) -> dict[str, Any]:
        response = self.session.get(self.api_url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def search(self, query: str, limit: int = 5) -> List[SearchHit]:
        """Return the first ``limit`` search hits for ``query``."""
        params = {
            "action": "query",
            "list": "search",
            "srsearch": query,
            "format": "json",
            "utf8": "",
            "origin": "*",
        }
        try:
            payload = self._get(params)
        except (requests.RequestException, ValueError) as exc:
            LOGGER.error("Wikipedia search failed for %r: %s", query, exc)
            raise SourceError(f"Wikipedia search failed: {exc}") from exc

        hits = payload.get("query", {}).get("search", [])
        return [
            SearchHit(
                title=hit["title"],
                pageid=int(hit["pageid"]),
                snippet=hit.get("snippet", ""),
                url=self.page_url(hit["pageid"]),
            )
            for hit in hits[: max(limit, 0)]
        ]

    def fetch_article_text(self, pageid: int) -> str:
        """Return the stripped body text of an article, or "" when it has none."""
        params = {
            "action": "parse",
            "pageid": pageid,
            "prop": "text",
            "format": "json",
            "origin": "*",
        }
        try:
            payload = self._get(params)
        except (requests.RequestException, ValueError) as exc:
            raise SourceError(f"Failed to fetch page {pageid}: {exc}") from exc

        html = payload.get("parse", {}).get("text", {}).get("*")
        if not html:
            return ""
        return html_to_text(html)


def scrape_text(url: str, *, timeout: float = 10.0, session: requests.Session | None = None) -> str:
    """Fetch a web page and return its visible main text; "" on failure."""
    http = session or requests
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        LOGGER.error("Error scraping %s: %s", url, exc)
        return ""

    soup = BeautifulSoup(response.text, "html.parser")
    for tag in soup.select(PAGE_NOISE_SELECTORS):
        tag.decompose()
    for selector in ("body", "article", "main", ".content"):
        node = soup.select_one(selector)
        if node is not None:
            text = collapse_whitespace(node.get_text(separator=" "))
            if text:
                return text
    return ""
