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
Configuration module for typeahead sessions.
"""

import os

from dotenv import load_dotenv

from .data_models.config import TypeaheadConfig

# Environment variable names
TYPEAHEAD_DEBOUNCE_MS_ENV = "TYPEAHEAD_DEBOUNCE_MS"
TYPEAHEAD_DEBOUNCE_PAGE_CHANGES_ENV = "TYPEAHEAD_DEBOUNCE_PAGE_CHANGES"
TYPEAHEAD_DEFAULT_SELECTED_VALUE_ENV = "TYPEAHEAD_DEFAULT_SELECTED_VALUE"
TYPEAHEAD_RESULTS_PER_PAGE_ENV = "TYPEAHEAD_RESULTS_PER_PAGE"
TYPEAHEAD_LOADING_LABEL_ENV = "TYPEAHEAD_LOADING_LABEL"
TYPEAHEAD_CLEAR_TERM_ON_SELECT_ENV = "TYPEAHEAD_CLEAR_TERM_ON_SELECT"
TYPEAHEAD_SEARCH_EMPTY_TERM_ENV = "TYPEAHEAD_SEARCH_EMPTY_TERM"
TYPEAHEAD_SURFACE_LOOKUP_ERRORS_ENV = "TYPEAHEAD_SURFACE_LOOKUP_ERRORS"

_ENV_FIELDS = {
    TYPEAHEAD_DEBOUNCE_MS_ENV: "debounce_ms",
    TYPEAHEAD_DEBOUNCE_PAGE_CHANGES_ENV: "debounce_page_changes",
    TYPEAHEAD_DEFAULT_SELECTED_VALUE_ENV: "default_selected_value",
    TYPEAHEAD_RESULTS_PER_PAGE_ENV: "results_per_page",
    TYPEAHEAD_LOADING_LABEL_ENV: "loading_label",
    TYPEAHEAD_CLEAR_TERM_ON_SELECT_ENV: "clear_term_on_select",
    TYPEAHEAD_SEARCH_EMPTY_TERM_ENV: "search_empty_term",
    TYPEAHEAD_SURFACE_LOOKUP_ERRORS_ENV: "surface_lookup_errors",
}


def _load_env_file() -> None:
    """Load .env file if present in the current directory."""
    load_dotenv()


def get_typeahead_config(**overrides: object) -> TypeaheadConfig:
    """
    Get typeahead configuration from environment variables.

    Only variables that are set (and non-blank) are passed on, so unset ones
    fall back to the model defaults. Keyword overrides take precedence over
    the environment.

    Returns:
        TypeaheadConfig object containing the configuration

    Raises:
        ValueError: If a provided value is invalid
    """
    # Load .env file if present
    _load_env_file()

    # Build config data, only including fields that are provided
    config_data: dict[str, object] = {}
    for env_name, field_name in _ENV_FIELDS.items():
        value = os.getenv(env_name)
        if value is not None and value.strip():
            config_data[field_name] = value.strip()

    config_data.update({k: v for k, v in overrides.items() if v is not None})
    return TypeaheadConfig.model_validate(config_data)
