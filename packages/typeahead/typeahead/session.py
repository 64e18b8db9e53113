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
The search session aggregate.

A SearchSession wires the orchestrator, selection state machine and
pagination tracker together and exposes one transition method per UI event.
Nothing the view layer reads is stored as an independent flag: the display
state and the visible list are derived on every read.
"""

import logging
from collections.abc import Callable, Hashable
from typing import Any, Generic, TypeVar

from typeahead.data_models.config import TypeaheadConfig
from typeahead.data_models.enums import DisplayState, NavigationKey, TextOwnership
from typeahead.data_models.search import ResultPage, SessionView
from typeahead.display import resolve_display_state
from typeahead.exceptions import ConfigurationError
from typeahead.orchestrator import LookupFn, SearchOrchestrator
from typeahead.pagination import PaginationTracker
from typeahead.selection import SelectionStateMachine

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

logger = logging.getLogger(__name__)


class SearchSession(Generic[T, K]):
    def __init__(
        self,
        lookup: LookupFn,
        key_of: Callable[[T], K],
        *,
        config: TypeaheadConfig | None = None,
        on_select_value: Callable[[K, T], Any] | None = None,
        display_string: Callable[[T], str] | None = None,
        on_change_search_value: Callable[[str], Any] | None = None,
        on_change: Callable[[SessionView], Any] | None = None,
    ) -> None:
        """
        Initialize a session around a lookup function.

        Args:
            lookup: ``(term, page) -> awaitable ResultPage``.
            key_of: Extracts the stable, unique key of an item.
            config: Session options; defaults to ``TypeaheadConfig()``.
            on_select_value: Called with ``(key, item)`` when a selection commits.
            display_string: Text shown in the input after a selection.
            on_change_search_value: Receives input changes when the caller owns
                the input text.
            on_change: Called with a fresh SessionView after each transition.
        """
        self.config = config or TypeaheadConfig()
        if (
            self.config.text_ownership == TextOwnership.EXTERNAL
            and on_change_search_value is None
        ):
            raise ConfigurationError(
                "on_change_search_value is required when the input text is "
                "externally owned"
            )

        self._display_string = display_string
        self._on_change_search_value = on_change_search_value
        self._on_change = on_change
        self._input_text = ""
        self._is_open = False

        self.selection: SelectionStateMachine[T, K] = SelectionStateMachine(
            key_of,
            default_selected_value=self.config.default_selected_value,
            on_select_value=on_select_value,
        )
        self.orchestrator = SearchOrchestrator.from_config(
            lookup, self.config, on_state_change=self._emit
        )
        self.orchestrator.subscribe(self._on_results)
        self.pagination = PaginationTracker(self.orchestrator)

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def is_open(self) -> bool:
        return self._is_open

    def display_state(self) -> DisplayState:
        return resolve_display_state(
            self.orchestrator.term,
            self.orchestrator.status(),
            len(self.orchestrator.current_result_page().items),
            failed=self.orchestrator.last_failure is not None,
            loading_label=self.config.loading_label,
            surface_errors=self.config.surface_lookup_errors,
        )

    def view(self) -> SessionView:
        state = self.display_state()
        loaded = state == DisplayState.LOADED
        visible = self._is_open and loaded
        if not loaded:
            # The applied page belongs to an older term or page.
            return SessionView(
                state=state,
                term=self.orchestrator.term,
                input_text=self._input_text,
                is_open=self._is_open,
                page_number=self.orchestrator.page,
            )
        result_page = self.orchestrator.current_result_page()
        return SessionView(
            state=state,
            term=self.orchestrator.term,
            input_text=self._input_text,
            is_open=self._is_open,
            items=result_page.items if visible else (),
            highlighted_index=self.selection.highlighted() if visible else None,
            page_number=result_page.page_number,
            total_pages=result_page.total_pages,
            total_results=result_page.total_results,
            has_next_page=self.pagination.has_next_page(),
            has_previous_page=self.pagination.has_previous_page(),
        )

    # Input events

    def on_input_change(self, text: str) -> None:
        if self.config.text_ownership == TextOwnership.EXTERNAL:
            self._is_open = True
            self.selection.clear()
            self._on_change_search_value(text)
            self._emit()
            return
        self.set_search_value(text)

    def set_search_value(self, text: str) -> None:
        """Sets the input text and searches for it.

        This is the entry point for callers that own the input text; for
        internally owned text it is reached through ``on_input_change``.
        """
        if text == self._input_text and text == self.orchestrator.term:
            return
        self._input_text = text
        self._is_open = True
        self.selection.clear()
        self.orchestrator.set_term(text)

    def on_focus(self) -> None:
        self._is_open = True
        self._emit()

    def on_blur(self) -> None:
        self._close_list()

    def on_key_down(self, key: str) -> bool:
        """Handles a navigation key; returns True when the key was consumed."""
        try:
            key = NavigationKey(key)
        except ValueError:
            return False

        if key == NavigationKey.ESCAPE:
            if not self._is_open:
                return False
            self._close_list()
            return True

        if not self._list_visible():
            return False

        if key == NavigationKey.ARROW_DOWN:
            self.selection.move_next()
        elif key == NavigationKey.ARROW_UP:
            self.selection.move_previous()
        else:
            highlighted = self.selection.highlighted()
            if highlighted is None:
                return False
            self._commit(highlighted)
            return True
        self._emit()
        return True

    def on_pointer_enter(self, index: int) -> None:
        if self._list_visible():
            self.selection.highlight(index)
            self._emit()

    def on_pointer_select(self, index: int) -> T | None:
        if not self._list_visible():
            return None
        return self._commit(index)

    # Pagination

    def next_page(self) -> bool:
        return self.pagination.next_page()

    def previous_page(self) -> bool:
        return self.pagination.previous_page()

    def go_to_page(self, page: int) -> bool:
        return self.pagination.go_to_page(page)

    # Lifecycle

    async def settle(self) -> SessionView:
        await self.orchestrator.settle()
        return self.view()

    def close(self) -> None:
        self.orchestrator.close()
        self._close_list()

    def _on_results(self, result_page: ResultPage) -> None:
        self.selection.on_list_replaced(result_page.items)

    def _list_visible(self) -> bool:
        return self._is_open and self.display_state() == DisplayState.LOADED

    def _close_list(self) -> None:
        self._is_open = False
        self.selection.clear()
        self._emit()

    def _commit(self, index: int) -> T | None:
        item = self.selection.select(index)
        if item is None:
            return None

        self._is_open = False
        owns_text = self.config.text_ownership == TextOwnership.INTERNAL
        if self.config.clear_term_on_select:
            if owns_text:
                self._input_text = ""
            self.orchestrator.clear_term()
        if owns_text and self._display_string is not None:
            self._input_text = self._display_string(item)
        logger.debug("Selected %r", self.selection.key_of(item))
        self._emit()
        return item

    def _emit(self) -> None:
        if self._on_change is not None:
            self._on_change(self.view())
