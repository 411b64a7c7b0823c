"""Directory and repository tree mapping utilities.

This package provides tools for turning a local directory or a remote GitHub
repository into an ASCII tree, a structured JSON record, summary statistics and
markdown documentation.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("repotree")
except PackageNotFoundError:
    __version__ = "unknown"
