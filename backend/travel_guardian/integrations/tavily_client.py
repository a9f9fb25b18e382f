import logging
from typing import Any, Dict, List, Optional

from tavily import TavilyClient

from travel_guardian.integrations.exceptions import IntegrationError, UpstreamAPIError
from travel_guardian.models.entities import SearchResponse, SearchResult

logger = logging.getLogger(__name__)

# Roughly 512 tokens of page text per result
DEFAULT_MAX_SNIPPET_CHARS = 2048


class TavilySearchGateway:
    """
    Domain-filtered web search used to look up live travel prices.

    The SDK client is created on first use so the service can start (and fall
    back to simulated prices) without a TAVILY_API_KEY.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        max_results: int = 5,
        max_snippet_chars: int = DEFAULT_MAX_SNIPPET_CHARS,
        search_depth: str = "basic",
        client: Optional[TavilyClient] = None,
    ):
        self._api_key = api_key
        self._client = client
        self.max_results = max_results
        self.max_snippet_chars = max_snippet_chars
        self.search_depth = search_depth

    @property
    def client(self) -> TavilyClient:
        if self._client is None:
            if not self._api_key:
                raise IntegrationError("TAVILY_API_KEY not set; live price search disabled")
            self._client = TavilyClient(api_key=self._api_key)
        return self._client

    def search(self, query: str, include_domains: List[str], timeout: float = 8.0) -> SearchResponse:
        """
        Run one search restricted to the given booking domains.

        Raises IntegrationError when unconfigured and UpstreamAPIError when the
        call fails or returns neither an answer nor any result.
        """
        client = self.client
        try:
            raw = client.search(
                query=query,
                search_depth=self.search_depth,
                max_results=self.max_results,
                include_domains=list(include_domains),
                include_answer=True,
                timeout=timeout,
            )
        except Exception as e:
            logger.error(f"Search failed for query '{query[:50]}...': {e}")
            raise UpstreamAPIError(f"Tavily search failed: {e}") from e

        response = self._parse(raw)
        if response.is_empty():
            raise UpstreamAPIError("Tavily search returned no answer and no results")

        logger.info(f"Search completed for query: {query[:50]}... ({len(response.results)} results)")
        return response

    def _parse(self, raw: Any) -> SearchResponse:
        if not isinstance(raw, dict):
            raise UpstreamAPIError(f"Malformed Tavily payload: {type(raw).__name__}")

        items = raw.get("results") or []
        if not isinstance(items, list):
            raise UpstreamAPIError("Malformed Tavily payload: 'results' is not a list")

        results = []
        for item in items[: self.max_results]:
            if not isinstance(item, dict):
                continue
            results.append(self._to_result(item))

        answer = raw.get("answer")
        return SearchResponse(
            answer=answer if isinstance(answer, str) and answer.strip() else None,
            results=results,
        )

    def _to_result(self, item: Dict[str, Any]) -> SearchResult:
        url = item.get("url", "")
        # Ensure url is a string, not a dict
        if isinstance(url, dict):
            url = url.get("url", "") or url.get("href", "")
        snippet = item.get("content") or item.get("snippet") or ""
        return SearchResult(
            title=str(item.get("title") or ""),
            url=str(url or ""),
            snippet=str(snippet)[: self.max_snippet_chars],
        )
