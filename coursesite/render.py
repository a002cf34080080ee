"""
render.py - Markdown to HTML

Thin wrapper over Python-Markdown. Output is not sanitized beyond what the
renderer itself does, and renderer errors are not caught.
"""

from typing import Iterable, Optional

import markdown

from coursesite.config_utils import DEFAULT_MARKDOWN_EXTENSIONS


def render_markdown(text: str, extensions: Optional[Iterable[str]] = None) -> str:
    """
    Convert cleaned lesson markdown to HTML.

    Args:
        text: Markdown source
        extensions: Python-Markdown extension names (defaults to
            tables, fenced_code and toc)

    Returns:
        HTML fragment
    """
    if extensions is None:
        extensions = DEFAULT_MARKDOWN_EXTENSIONS
    return markdown.markdown(text, extensions=list(extensions))
