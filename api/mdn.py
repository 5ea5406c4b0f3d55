"""
MDN documentation from a local mirror.

Pages are read from a checkout of https://github.com/mdn/content. A URL
path such as ``/en-US/docs/Web/API/Element/mouseover_event`` lives at
``files/en-us/web/api/element/mouseover_event/index.md`` in that repo.
"""

import logging
import re
from pathlib import Path, PurePosixPath

from core.errors import NotFound
from models.config import Settings

__all__ = ["HOST", "doc_path_for", "clean_macros", "load"]

HOST = "developer.mozilla.org"
DOCS_SEGMENT = "docs"
CONTENT_FILE = "index.md"

# Cross-reference macros with a single quoted argument, e.g. {{domxref("Element")}}
XREF_MACRO = re.compile(
    r"\{\{\s*(?:domxref|jsxref|cssxref|htmlelement|httpheader|httpmethod"
    r"|svgelement|glossary)\s*\(\s*([\"'])([^\"']+)\1\s*\)\s*\}\}",
    re.IGNORECASE,
)
ANY_MACRO = re.compile(r"\{\{.*?\}\}", re.DOTALL)

logger = logging.getLogger(__name__)


def doc_path_for(url_path: str) -> PurePosixPath:
    """Map a URL path to the content file's path relative to ``files/``."""
    segments = [s for s in url_path.lower().split("/") if s and s not in (".", "..")]
    # Only the namespace segment after the locale; later "docs" are page names
    if DOCS_SEGMENT in segments:
        segments.remove(DOCS_SEGMENT)
    return PurePosixPath(*segments, CONTENT_FILE)


def clean_macros(text: str) -> str:
    """Inline cross-references as code and drop every other KumaScript macro."""
    text = XREF_MACRO.sub(lambda m: f"`{m.group(2)}`", text)
    return ANY_MACRO.sub("", text)


def load(settings: Settings, url_path: str) -> str:
    """Read and clean the page for ``url_path``.

    Raises:
        NotFound: no mirror is configured or the page file does not exist.
    """
    relative = doc_path_for(url_path)
    if settings.mdn_content_dir is None:
        raise NotFound(f"<MDN_CONTENT_DIR not set>/{relative}")

    path = Path(settings.mdn_content_dir) / relative
    try:
        raw = path.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as e:
        logger.info(f"No MDN page at {path}")
        raise NotFound(str(path)) from e

    return clean_macros(raw)
