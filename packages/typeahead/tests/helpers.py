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
Shared helpers for driving lookups and the event loop from tests.
"""

import asyncio

from typeahead.data_models.search import ResultPage


class ControlledLookup:
    """A lookup whose responses are resolved by the test, in any order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []
        self.futures: list[asyncio.Future] = []

    def __call__(self, term: str, page: int) -> asyncio.Future:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((term, page))
        self.futures.append(future)
        return future

    def resolve(self, index: int, result: object) -> None:
        self.futures[index].set_result(result)

    def fail(self, index: int, error: Exception) -> None:
        self.futures[index].set_exception(error)


def make_page(items, *, total_results=None, page_number=1, results_per_page=10):
    items = list(items)
    return ResultPage(
        items=items,
        total_results=len(items) if total_results is None else total_results,
        page_number=page_number,
        results_per_page=results_per_page,
    )


async def flush() -> None:
    """Lets every callback that is ready on the loop run."""
    for _ in range(5):
        await asyncio.sleep(0)
