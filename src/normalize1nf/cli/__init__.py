"""normalize1nf CLI - Command-line interface for 1NF normalization of export configurations.

Commands:
- normalize1nf normalize: Generate the normalized configuration
- normalize1nf inspect: List the columns that would be normalized
- normalize1nf version: Show version information
"""

from .main import app

__all__ = ["app"]
