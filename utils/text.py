"""Text helpers shared by the content adapters."""

import html
import re

from bs4 import BeautifulSoup

_BLANK_RUNS = re.compile(r"\n{3,}")


def html_to_text(markup: str) -> str:
    """Flatten an HTML fragment to readable text.

    Code blocks are fenced so they survive as code; everything else is
    reduced to its text with paragraph breaks kept.
    """
    if not markup:
        return ""

    soup = BeautifulSoup(markup, "html.parser")

    for pre in soup.find_all("pre"):
        pre.replace_with(f"\n```\n{pre.get_text().rstrip()}\n```\n")
    for code in soup.find_all("code"):
        code.replace_with(f"`{code.get_text()}`")

    text = soup.get_text()
    lines = (line.rstrip() for line in text.splitlines())
    text = "\n".join(lines).strip()
    return _BLANK_RUNS.sub("\n\n", text)


def unescape(text: str) -> str:
    """Decode HTML entities, as found in Stack Exchange titles."""
    return html.unescape(text or "")
