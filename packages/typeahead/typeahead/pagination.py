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
Pagination availability derived from the latest applied result page.
"""

from typeahead.orchestrator import SearchOrchestrator


class PaginationTracker:
    """Reads page metadata from the orchestrator and requests page changes."""

    def __init__(self, orchestrator: SearchOrchestrator) -> None:
        self._orchestrator = orchestrator

    @property
    def page_number(self) -> int:
        return self._orchestrator.current_result_page().page_number

    @property
    def results_per_page(self) -> int:
        return self._orchestrator.current_result_page().results_per_page

    @property
    def total_results(self) -> int:
        return self._orchestrator.current_result_page().total_results

    @property
    def total_pages(self) -> int:
        return self._orchestrator.current_result_page().total_pages

    def has_previous_page(self) -> bool:
        return self.page_number > 1

    def has_next_page(self) -> bool:
        return self.page_number * self.results_per_page < self.total_results

    def go_to_page(self, page: int) -> bool:
        """Requests ``page``; pages below 1 are rejected without side effects."""
        if page < 1:
            return False
        return self._orchestrator.set_page(page) is not None

    def next_page(self) -> bool:
        if not self.has_next_page():
            return False
        return self.go_to_page(self.page_number + 1)

    def previous_page(self) -> bool:
        if not self.has_previous_page():
            return False
        return self.go_to_page(self.page_number - 1)
