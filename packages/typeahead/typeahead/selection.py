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
Keyboard and pointer highlight over the current result list, and the commit
of a final selection.
"""

import logging
from collections.abc import Callable, Hashable, Sequence
from typing import Any, Generic, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

logger = logging.getLogger(__name__)


class SelectionStateMachine(Generic[T, K]):
    def __init__(
        self,
        key_of: Callable[[T], K],
        *,
        default_selected_value: K | None = None,
        on_select_value: Callable[[K, T], Any] | None = None,
    ) -> None:
        self._key_of = key_of
        self._default_selected_value = default_selected_value
        self._on_select_value = on_select_value
        self._items: tuple[T, ...] = ()
        self._highlighted: int | None = None

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    def highlighted(self) -> int | None:
        return self._highlighted

    def highlighted_item(self) -> T | None:
        if self._highlighted is None:
            return None
        return self._items[self._highlighted]

    def key_of(self, item: T) -> K:
        return self._key_of(item)

    def on_list_replaced(self, items: Sequence[T]) -> None:
        """
        Adopts a new item list and reconciles the highlight against it.

        The highlight is dropped unless the configured default value is present
        in the new list, in which case that item is highlighted.
        """
        self._items = tuple(items)
        self._highlighted = None

        keys = [self._key_of(item) for item in self._items]
        if len(set(keys)) != len(keys):
            logger.warning(
                "Item keys are not unique within the result list: %s", keys
            )

        if self._default_selected_value is None:
            return
        if self._default_selected_value in keys:
            self._highlighted = keys.index(self._default_selected_value)

    def move_next(self) -> int | None:
        if not self._items:
            return self._highlighted
        if self._highlighted is None or self._highlighted == len(self._items) - 1:
            self._highlighted = 0
        else:
            self._highlighted += 1
        return self._highlighted

    def move_previous(self) -> int | None:
        if not self._items:
            return self._highlighted
        if self._highlighted is None or self._highlighted == 0:
            self._highlighted = len(self._items) - 1
        else:
            self._highlighted -= 1
        return self._highlighted

    def highlight(self, index: int) -> int | None:
        """Highlights the item under the pointer; out-of-range is ignored."""
        if 0 <= index < len(self._items):
            self._highlighted = index
        return self._highlighted

    def clear(self) -> None:
        self._highlighted = None

    def select(self, index: int) -> T | None:
        """
        Commits the item at ``index`` as the final selection.

        Returns the selected item, or None when the index is out of range (in
        which case nothing changes and the callback is not invoked).
        """
        if not 0 <= index < len(self._items):
            logger.debug(
                "Ignoring selection of index %d in a list of %d", index, len(self._items)
            )
            return None

        item = self._items[index]
        self._highlighted = None
        if self._on_select_value is not None:
            self._on_select_value(self._key_of(item), item)
        return item

    def select_highlighted(self) -> T | None:
        if self._highlighted is None:
            return None
        return self.select(self._highlighted)
