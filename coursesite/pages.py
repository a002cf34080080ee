# coursesite
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

"""
pages.py - Build the data for one lesson page

Pipeline, run fresh for every request (nothing is cached):

    slug -> resolve lesson + neighbours -> read markdown -> clean -> render
         -> PageData(title, content, nextSlug, previousSlug)

The only branch is found / not found. LessonNotFoundError and
ContentNotFoundError both mean "not found"; every other error propagates.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from coursesite.config_utils import SiteConfig
from coursesite.content import ContentStore
from coursesite.course_structure import CourseStructure
from coursesite.normalize import clean_content
from coursesite.render import render_markdown
from coursesite.resolver import resolve_lesson


logger = logging.getLogger(__name__)


class PageData(BaseModel):
    """Everything the page template needs for one lesson"""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    content: str
    next_slug: Optional[str] = Field(default=None, alias="nextSlug")
    previous_slug: Optional[str] = Field(default=None, alias="previousSlug")


def load_page(
    structure: CourseStructure,
    store: ContentStore,
    slug: str,
    config: Optional[SiteConfig] = None,
) -> PageData:
    """
    Resolve, read, clean and render a lesson.

    Args:
        structure: Loaded course structure
        store: Where lesson markdown is read from
        slug: Requested lesson slug
        config: Supplies the legacy asset prefix and markdown extensions

    Returns:
        PageData for the lesson

    Raises:
        LessonNotFoundError: No visible lesson has this slug
        ContentNotFoundError: The lesson has no content file
    """
    config = config or SiteConfig()

    resolved = resolve_lesson(structure, slug)
    raw = store.read(resolved.lesson.slug)
    cleaned = clean_content(
        raw,
        config.legacy_asset_prefix,
        source=store.path_for(resolved.lesson.slug),
    )
    html = render_markdown(cleaned, config.markdown_extensions)

    logger.debug("Rendered lesson '%s' (%d bytes of HTML)", slug, len(html))

    return PageData(
        title=resolved.lesson.title,
        content=html,
        next_slug=resolved.next_slug,
        previous_slug=resolved.previous_slug,
    )
