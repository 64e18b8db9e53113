"""
Version information for the typeahead package.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("typeahead")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "0.0.0+unknown"
