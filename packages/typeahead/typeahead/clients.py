# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Lookup adapters.

Each adapter is an async callable ``(term, page) -> ResultPage`` that can be
handed to a SearchSession or SearchOrchestrator as its lookup function.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

import httpx

from typeahead.cache import LruCache
from typeahead.data_models.search import DEFAULT_RESULTS_PER_PAGE, ResultPage
from typeahead.exceptions import LookupFailure
from typeahead.orchestrator import LookupFn

logger = logging.getLogger(__name__)


class StaticLookup:
    """Case-insensitive substring search over an in-memory list of items."""

    def __init__(
        self,
        items: Sequence[Any],
        text_of: Callable[[Any], str] = str,
        *,
        results_per_page: int = DEFAULT_RESULTS_PER_PAGE,
        delay: float = 0.0,
    ) -> None:
        if results_per_page <= 0:
            raise ValueError("results_per_page must be positive")
        self.items = list(items)
        self.text_of = text_of
        self.results_per_page = results_per_page
        self.delay = delay

    async def __call__(self, term: str, page: int) -> ResultPage:
        if self.delay:
            await asyncio.sleep(self.delay)

        needle = term.lower()
        matches = [item for item in self.items if needle in self.text_of(item).lower()]
        start = (page - 1) * self.results_per_page
        return ResultPage(
            items=matches[start : start + self.results_per_page],
            total_results=len(matches),
            page_number=page,
            results_per_page=self.results_per_page,
        )


class HttpLookupClient:
    """Looks up items from a JSON search endpoint.

    The endpoint is called as ``GET <url>?<term_param>=<term>&<page_param>=<page>``
    and must answer with a body that validates as a ResultPage, either flat or
    in the ``{"items": [...], "pageMeta": {...}}`` shape.
    """

    def __init__(
        self,
        url: str,
        *,
        term_param: str = "q",
        page_param: str = "page",
        headers: dict[str, str] | None = None,
        timeout: float | None = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.term_param = term_param
        self.page_param = page_param
        self.headers = headers or {}
        self.timeout = timeout
        self._client = client

    async def __call__(self, term: str, page: int) -> ResultPage:
        params = {self.term_param: term, self.page_param: page}
        if self._client is not None:
            return await self._fetch(self._client, term, page, params)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._fetch(client, term, page, params)

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        term: str,
        page: int,
        params: dict[str, Any],
    ) -> ResultPage:
        try:
            response = await client.get(self.url, params=params, headers=self.headers)
            response.raise_for_status()
            return ResultPage.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise LookupFailure(
                f"Search endpoint returned {e.response.status_code}",
                term=term,
                page=page,
            ) from e
        except httpx.RequestError as e:
            raise LookupFailure(
                f"Search request failed due to a network error: {e}",
                term=term,
                page=page,
            ) from e
        except ValueError as e:
            # Malformed JSON and pydantic validation errors are both ValueErrors.
            raise LookupFailure(
                f"Search endpoint returned an invalid payload: {e}",
                term=term,
                page=page,
            ) from e


class CachedLookup:
    """Memoizes an idempotent lookup per ``(term, page)``.

    Only successful responses are cached; a failed lookup is retried on the
    next call.
    """

    def __init__(self, lookup: LookupFn, capacity: int = 128) -> None:
        self._lookup = lookup
        self.cache = LruCache(capacity)

    async def __call__(self, term: str, page: int) -> ResultPage:
        key = (term, page)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %r (page %d)", term, page)
            return cached

        result_page = ResultPage.model_validate(await self._lookup(term, page))
        self.cache.put(key, result_page)
        return result_page
