"""Markdown calendar generator package.

Renders GitHub-flavoured markdown calendar tables for a month, a whole
year or an inclusive range of months.
"""

from .meta import VERSION

__all__ = ["__version__"]
__version__ = VERSION
