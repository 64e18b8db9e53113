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

from enum import Enum


class OrchestratorStatus(str, Enum):
    """Lifecycle of the most recently issued search request."""

    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"


class DisplayState(str, Enum):
    """The single mode shown to the view layer at any instant."""

    IDLE = "idle"
    SEARCHING = "searching"
    LOADING = "loading"
    LOADED = "loaded"
    NO_RESULTS = "no_results"
    ERROR = "error"


class LoadingLabel(str, Enum):
    """Which display state an in-flight lookup is reported as."""

    LOADING = "loading"
    SEARCHING = "searching"


class TextOwnership(str, Enum):
    """Whether the session or an outside owner holds the input text."""

    INTERNAL = "internal"
    EXTERNAL = "external"


class NavigationKey(str, Enum):
    ARROW_DOWN = "ArrowDown"
    ARROW_UP = "ArrowUp"
    ENTER = "Enter"
    ESCAPE = "Escape"
