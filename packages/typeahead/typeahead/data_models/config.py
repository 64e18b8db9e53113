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
Pydantic models for configuring a typeahead session.
"""

from typing import Any

from pydantic import BaseModel, Field

from .enums import LoadingLabel, TextOwnership
from .search import DEFAULT_RESULTS_PER_PAGE


class TypeaheadConfig(BaseModel):
    """Recognized options of a search session."""

    debounce_ms: int = Field(
        default=0,
        ge=0,
        description="Delay before a term change is dispatched (0 dispatches immediately)",
    )
    debounce_page_changes: bool = Field(
        default=False,
        description="Whether page changes wait for the debounce window too",
    )
    default_selected_value: Any | None = Field(
        default=None,
        description="Item key to highlight whenever it appears in a new result list",
    )
    results_per_page: int = Field(
        default=DEFAULT_RESULTS_PER_PAGE,
        gt=0,
        description="Page size hint used before the first response arrives",
    )
    loading_label: LoadingLabel = Field(
        default=LoadingLabel.LOADING,
        description="Display state reported while a lookup is in flight",
    )
    clear_term_on_select: bool = Field(
        default=True,
        description="Clear the active search term once an item is selected",
    )
    search_empty_term: bool = Field(
        default=False,
        description="Dispatch lookups for the empty term instead of going idle",
    )
    surface_lookup_errors: bool = Field(
        default=False,
        description="Report failed lookups as an error state instead of idle",
    )
    text_ownership: TextOwnership = Field(
        default=TextOwnership.INTERNAL,
        description="Whether the session or its caller owns the input text",
    )

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000
