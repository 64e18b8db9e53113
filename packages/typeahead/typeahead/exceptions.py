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
Exceptions raised by the typeahead package.
"""


class TypeaheadError(Exception):
    """Base class for all typeahead errors."""

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {super().__str__()}"


class LookupFailure(TypeaheadError):
    """The lookup function failed to produce a result page."""

    def __init__(self, message: str, *, term: str = "", page: int = 1) -> None:
        super().__init__(message)
        self.term = term
        self.page = page


class ConfigurationError(TypeaheadError):
    """Raised when a session is assembled from inconsistent options."""
