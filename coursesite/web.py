# coursesite
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

"""
web.py - FastAPI application serving lesson pages

Routes:
    GET /                       Course index (tracks, units, visible lessons)
    GET /api/lessons            Visible lessons with their neighbours (JSON)
    GET /api/lessons/{slug}     PageData for one lesson (JSON)
    GET /{slug}                 Lesson page (HTML), or a file from the assets
                                directory when the name is not a lesson

The course structure is loaded once, when the app is created, and shared
read-only by every request. Lesson content is read and rendered on every
request. Only NotFoundError becomes a 404; anything else is left to the
server's 500 handling.
"""

import logging
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ConfigDict, Field

from coursesite import __version__
from coursesite.config_utils import SiteConfig, get_config
from coursesite.content import ContentStore, is_safe_path
from coursesite.course_structure import CourseStructure, load_course_structure
from coursesite.errors import NotFoundError
from coursesite.pages import PageData, load_page
from coursesite.resolver import iter_resolved_lessons


logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


class LessonSummary(BaseModel):
    """One entry of the lesson listing"""
    model_config = ConfigDict(populate_by_name=True)

    slug: str
    title: str
    lab: Optional[str] = None
    next_slug: Optional[str] = Field(default=None, alias="nextSlug")
    previous_slug: Optional[str] = Field(default=None, alias="previousSlug")


def create_app(
    config: Optional[SiteConfig] = None,
    structure: Optional[CourseStructure] = None,
) -> FastAPI:
    """
    Return a configured FastAPI application.

    Args:
        config: Site configuration (loaded from cwd/env when omitted)
        structure: Pre-loaded course structure (read from
            config.structure_path when omitted)

    Raises:
        CourseStructureError: If the structure file is missing or malformed
    """
    config = config or get_config()
    if structure is None:
        structure = load_course_structure(config.structure_path)
    store = ContentStore(config.content_path)

    app = FastAPI(
        title="Course Site",
        description="Lessons rendered from markdown",
        version=__version__,
    )
    app.state.config = config
    app.state.course = structure
    app.state.store = store

    logger.info(
        "Serving %d tracks from %s (content: %s)",
        len(structure.tracks),
        config.structure_path,
        config.content_path,
    )

    def _asset_file(name: str) -> Optional[Path]:
        candidate = config.assets_path / name
        if is_safe_path(config.assets_path, candidate) and candidate.is_file():
            return candidate
        return None

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        return templates.TemplateResponse(
            request,
            "index.html",
            {"course": structure, "title": "Course"},
        )

    @app.get("/api/lessons", response_model=List[LessonSummary])
    def list_lessons():
        return [
            LessonSummary(
                slug=item.lesson.slug,
                title=item.lesson.title,
                lab=item.lesson.lab,
                next_slug=item.next_slug,
                previous_slug=item.previous_slug,
            )
            for item in iter_resolved_lessons(structure)
        ]

    @app.get("/api/lessons/{slug}", response_model=PageData)
    def lesson_data(slug: str):
        try:
            return load_page(structure, store, slug, config)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail="Not found") from e

    @app.get("/{slug}", response_class=HTMLResponse)
    def lesson_page(request: Request, slug: str):
        try:
            page = load_page(structure, store, slug, config)
        except NotFoundError:
            # Normalized lesson content links images relative to the site root
            asset = _asset_file(slug)
            if asset is not None:
                return FileResponse(asset)
            return templates.TemplateResponse(
                request,
                "not_found.html",
                {"title": "Not found", "slug": slug},
                status_code=404,
            )
        return templates.TemplateResponse(
            request,
            "lesson.html",
            {"page": page, "title": page.title},
        )

    return app
