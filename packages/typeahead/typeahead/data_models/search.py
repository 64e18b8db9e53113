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
Data models for search functionality.

This module defines Pydantic models for the search requests dispatched by the
orchestrator, the result pages returned by lookup functions, and the view
snapshot handed to the rendering layer.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from typeahead.data_models.enums import DisplayState

T = TypeVar("T")

DEFAULT_RESULTS_PER_PAGE = 10


class SearchRequest(BaseModel):
    """A single dispatched lookup, tagged for staleness detection."""

    model_config = ConfigDict(frozen=True)

    term: str = Field(..., description="The search term sent to the lookup")
    page: int = Field(1, ge=1, description="The 1-based page number requested")
    sequence_id: int = Field(
        ..., ge=1, description="Strictly increasing id assigned at dispatch time"
    )


class ResultPage(BaseModel, Generic[T]):
    """An immutable snapshot of one search response.

    Accepts either flat fields (snake_case or camelCase) or the nested
    ``{"items": [...], "pageMeta": {...}}`` payload returned by search
    endpoints.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    items: tuple[T, ...] = Field(default=(), description="Items in ranked order")
    total_results: int = Field(0, ge=0, description="Total matches across pages")
    page_number: int = Field(1, ge=1, description="The 1-based page returned")
    results_per_page: int = Field(
        DEFAULT_RESULTS_PER_PAGE, gt=0, description="Page size used by the lookup"
    )

    @model_validator(mode="before")
    @classmethod
    def flatten_page_meta(cls, data: Any) -> Any:
        """Lift the fields of a nested ``pageMeta`` object to the top level."""
        if isinstance(data, dict) and isinstance(data.get("pageMeta"), dict):
            data = {**data["pageMeta"], **{k: v for k, v in data.items() if k != "pageMeta"}}
        return data

    @classmethod
    def empty(
        cls, results_per_page: int = DEFAULT_RESULTS_PER_PAGE
    ) -> "ResultPage[Any]":
        return cls(results_per_page=results_per_page)

    @property
    def total_pages(self) -> int:
        return -(-self.total_results // self.results_per_page)


class SessionView(BaseModel):
    """Everything the view layer needs to render one frame."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    state: DisplayState
    term: str = ""
    input_text: str = ""
    is_open: bool = False
    items: tuple[Any, ...] = ()
    highlighted_index: int | None = None
    page_number: int = 1
    total_pages: int = 0
    total_results: int = 0
    has_next_page: bool = False
    has_previous_page: bool = False

    @property
    def show_list(self) -> bool:
        return bool(self.items)
