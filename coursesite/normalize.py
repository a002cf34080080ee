"""
normalize.py - Clean raw lesson markdown before rendering

Lesson files still carry metadata and asset paths from the previous site:

- A YAML front matter block at the top of the file (title, objectives, ...).
  It is parsed with python-frontmatter and dropped; only the body is kept.
  Files without front matter pass through unchanged.
- Image links written relative to the old layout, e.g. ../assets/img.png.
  The legacy prefix is deleted everywhere it occurs, leaving img.png.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import frontmatter
import yaml

from coursesite.errors import invalid_frontmatter_error


DEFAULT_LEGACY_ASSET_PREFIX = "../assets/"

BYTE_ORDER_MARK = "\ufeff"


def split_frontmatter(text: str, source: Optional[Path] = None) -> Tuple[Dict[str, Any], str]:
    """
    Split a document into its front matter and body.

    Args:
        text: Raw markdown
        source: File the text came from, for error messages

    Returns:
        (metadata dict, body text); metadata is empty when there is no header

    Raises:
        FrontmatterError: If the header is present but is not valid YAML
    """
    # A byte order mark would hide the opening "---"
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK):]
    try:
        metadata, body = frontmatter.parse(text)
    except yaml.YAMLError as e:
        raise invalid_frontmatter_error(Path(source or "<content>"), cause=e) from e
    return metadata, body


def strip_metadata(text: str, source: Optional[Path] = None) -> str:
    """Return the document body without its front matter."""
    _, body = split_frontmatter(text, source)
    return body


def rewrite_asset_paths(text: str, prefix: str = DEFAULT_LEGACY_ASSET_PREFIX) -> str:
    """
    Delete every occurrence of the legacy asset prefix.

    Deleting one occurrence can join its neighbours into a new one
    ("../asse../assets/ts/"), so this repeats until none are left. The
    result never contains the prefix, which makes the rewrite idempotent.
    """
    if not prefix:
        return text
    while prefix in text:
        text = text.replace(prefix, "")
    return text


def clean_content(
    raw: str,
    legacy_prefix: str = DEFAULT_LEGACY_ASSET_PREFIX,
    source: Optional[Path] = None,
) -> str:
    """Strip front matter, then rewrite legacy asset paths."""
    return rewrite_asset_paths(strip_metadata(raw, source), legacy_prefix)
