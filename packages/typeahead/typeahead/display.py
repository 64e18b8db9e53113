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
Derivation of the single display state shown by the view layer.
"""

from typeahead.data_models.enums import DisplayState, LoadingLabel, OrchestratorStatus


def resolve_display_state(
    term: str,
    status: OrchestratorStatus,
    item_count: int,
    *,
    failed: bool = False,
    loading_label: LoadingLabel = LoadingLabel.LOADING,
    surface_errors: bool = False,
) -> DisplayState:
    """Maps the session signals to exactly one display state.

    The checks run in a fixed order and the first match wins. A pending or
    in-flight search outranks any list still held from an earlier term, so
    stale items are never presented as the answer to the current query.

    Args:
        term: The active search term.
        status: The orchestrator status for the latest request.
        item_count: Number of items in the current result page.
        failed: Whether the latest request failed.
        loading_label: Label policy for in-flight lookups.
        surface_errors: Report failures as ``ERROR`` rather than ``IDLE``.
    """
    if status == OrchestratorStatus.FETCHING:
        if loading_label == LoadingLabel.SEARCHING:
            return DisplayState.SEARCHING
        return DisplayState.LOADING
    if status == OrchestratorStatus.DEBOUNCING:
        return DisplayState.SEARCHING
    if not term:
        return DisplayState.IDLE
    if failed:
        return DisplayState.ERROR if surface_errors else DisplayState.IDLE
    if item_count == 0:
        return DisplayState.NO_RESULTS
    return DisplayState.LOADED
