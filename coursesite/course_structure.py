# coursesite
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

"""
course_structure.py - Course structure schema and loader

The course structure is a declarative document of tracks -> units -> lessons:

    {
      "tracks": [
        {
          "title": "Introduction to Solana",
          "units": [
            {
              "title": "Client interaction with the Solana network",
              "lessons": [
                {"title": "Read data from the network", "slug": "intro-to-reading-data"},
                {"title": "Old lesson", "slug": "old-lesson", "hidden": true}
              ]
            }
          ]
        }
      ]
    }

It is parsed once, validated, and then treated as read-only: every model is
frozen and every sequence is a tuple.
"""

import json
import logging
from collections import Counter
from types import MappingProxyType
from pathlib import Path
from typing import Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from coursesite.errors import CourseStructureError, invalid_structure_error


logger = logging.getLogger(__name__)

# Letters, digits, hyphens and underscores; must start with a letter or digit
SLUG_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_-]*$"


# =============================================================================
# Schema
# =============================================================================

class Lesson(BaseModel):
    """A single lesson page."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    slug: str = Field(pattern=SLUG_PATTERN)
    lab: Optional[str] = None
    hidden: bool = False
    number: Optional[int] = None
    objectives: tuple[str, ...] = ()
    translations: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("translations")
    @classmethod
    def _read_only_translations(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("translations")
    def _dump_translations(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)


class Unit(BaseModel):
    """A group of lessons within a track."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    lessons: tuple[Lesson, ...] = ()


class Track(BaseModel):
    """Top-level grouping of course content."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    units: tuple[Unit, ...] = ()


class CourseStructure(BaseModel):
    """All tracks of the course, in document order."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    tracks: tuple[Track, ...]

    def iter_lessons(self):
        """Yield every lesson, hidden ones included, in document order."""
        for track in self.tracks:
            for unit in track.units:
                yield from unit.lessons


# =============================================================================
# Loading
# =============================================================================

def _read_document(path: Path) -> object:
    """Read a JSON or YAML document based on the file suffix."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def _describe_errors(error: ValidationError) -> list[str]:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        problems.append(f"{location}: {item['msg']}")
    return problems


def parse_course_structure(data: object, source: Union[str, Path] = "<data>") -> CourseStructure:
    """
    Validate already-decoded course structure data.

    Args:
        data: Decoded JSON/YAML document
        source: Where the data came from, for error messages

    Returns:
        Validated, immutable CourseStructure

    Raises:
        CourseStructureError: If the data does not match the schema
    """
    try:
        return CourseStructure.model_validate(data)
    except ValidationError as e:
        raise invalid_structure_error(Path(source), _describe_errors(e), cause=e) from e


def load_course_structure(path: Path) -> CourseStructure:
    """
    Load and validate the course structure file.

    Args:
        path: Path to course-structure.json (or .yaml/.yml)

    Returns:
        Validated, immutable CourseStructure

    Raises:
        CourseStructureError: If the file is missing, unreadable as JSON/YAML,
            or does not match the schema
    """
    path = Path(path)
    if not path.is_file():
        raise CourseStructureError(
            message=f"Course structure file not found: {path.name}",
            suggestion="Set structure_file in coursesite.yaml or COURSESITE_STRUCTURE",
            context={"path": str(path)},
        )

    try:
        data = _read_document(path)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CourseStructureError(
            message=f"Could not parse {path.name}",
            context={"path": str(path)},
            cause=e,
        ) from e

    structure = parse_course_structure(data, path)

    for slug in find_duplicate_slugs(structure):
        logger.warning("Duplicate lesson slug '%s' in %s; the first occurrence wins", slug, path.name)

    logger.debug(
        "Loaded %d tracks, %d lessons from %s",
        len(structure.tracks),
        sum(1 for _ in structure.iter_lessons()),
        path,
    )
    return structure


def find_duplicate_slugs(structure: CourseStructure) -> list[str]:
    """
    Return slugs that appear more than once among visible lessons.

    Lookup uses the first occurrence, so later duplicates are unreachable.
    """
    counts = Counter(lesson.slug for lesson in structure.iter_lessons() if not lesson.hidden)
    return [slug for slug, count in counts.items() if count > 1]
