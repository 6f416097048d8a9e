"""Client for the Throxy web-scraping tools API.

Provides website-to-markdown scraping, Tavily web search and BuiltWith
technology detection. None of the LLM lookups use it; it backs the separate
tech-stack collection step.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import requests

from university_enricher.backends import BackendError
from university_enricher.models import University

logger = logging.getLogger(__name__)

THROXY_BASE_URL = "https://app.throxy.ai/api/tools/web-scraping"
DEFAULT_TIMEOUT = 60


class ThroxyClient:
    """Thin wrapper over the Throxy tools endpoints.

    Every endpoint answers with ``{"success": bool, "data": ..., "error": str}``;
    ``data`` is returned on success, anything else raises BackendError.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = THROXY_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def _request(self, endpoint: str, params: Optional[dict] = None, method: str = "GET") -> Any:
        url = f"{self.base_url}/{endpoint}"
        logger.debug(f"Making Throxy API {method} request to {endpoint}: {params}")

        try:
            if method == "GET":
                response = self.session.get(url, params=params, timeout=self.timeout)
            else:
                response = self.session.post(url, json=params, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Throxy API request failed for {endpoint}: status={status}")
            if status == 401:
                raise BackendError("Invalid Throxy API key", status=status) from e
            if status == 429:
                raise BackendError("Rate limit exceeded", status=status) from e
            if status is not None and status >= 500:
                raise BackendError("Throxy API server error", status=status) from e
            raise BackendError(f"Throxy API Error: {e}", status=status) from e
        except requests.RequestException as e:
            raise BackendError(f"Throxy API Error: {e}") from e
        except ValueError as e:
            raise BackendError(f"Throxy API Error: invalid JSON response from {endpoint}") from e

        if not body.get("success"):
            error = body.get("error") or "Unknown error occurred"
            logger.error(f"Throxy API error for {endpoint}: {error}")
            raise BackendError(error, status=response.status_code)

        return body.get("data")

    def website_markdown_scrape(self, url: str) -> str:
        """Fetch a web page rendered as markdown."""
        return self._request("website-markdown-scrape", {"url": url})

    def tavily_search(self, query: str) -> Any:
        """Run a Tavily web search."""
        return self._request("tavily-search", {"query": query}, method="POST")

    def built_with(self, url: str) -> list[str]:
        """Return the technologies BuiltWith detects on a site."""
        return self._request("built-with", {"url": url}) or []


def collect_tech_stacks(
    client: ThroxyClient,
    universities: list[University],
    concurrency_limit: int = 5,
) -> list[University]:
    """Fill ``tech_stack`` for each university from BuiltWith.

    Same containment as the LLM enrichment: a failure leaves the university
    unchanged. Results are in input order.
    """

    def collect(university: University) -> University:
        try:
            stack = client.built_with(university.domain)
        except Exception as e:
            logger.error(f"Error collecting tech stack for {university.name}: {e}")
            return university
        if not stack:
            return university
        return university.model_copy(update={"tech_stack": [str(t) for t in stack]})

    with ThreadPoolExecutor(max_workers=max(concurrency_limit, 1)) as ex:
        results = list(ex.map(collect, universities))

    found = sum(1 for u in results if u.tech_stack)
    logger.info(f"Collected tech stacks for {found} of {len(results)} universities")
    return results
