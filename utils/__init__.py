"""
Utility functions shared by the content adapters.

All utilities are stateless and lightweight.
"""

from utils.text import html_to_text, unescape

__all__ = [
    "html_to_text",
    "unescape",
]
