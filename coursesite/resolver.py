"""
resolver.py - Lesson lookup and previous/next navigation

The visible lesson sequence is every lesson of every unit of every track in
document order, with hidden lessons left out. Adjacency is defined by that
sequence only.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from coursesite.course_structure import CourseStructure, Lesson
from coursesite.errors import LessonNotFoundError


@dataclass(frozen=True)
class ResolvedLesson:
    """A lesson plus the slugs of its neighbours in the visible sequence"""
    lesson: Lesson
    previous_slug: Optional[str] = None
    next_slug: Optional[str] = None


def visible_lessons(structure: CourseStructure) -> List[Lesson]:
    """Flatten the structure into the ordered list of non-hidden lessons."""
    return [lesson for lesson in structure.iter_lessons() if not lesson.hidden]


def _neighbours(lessons: List[Lesson], index: int) -> ResolvedLesson:
    previous_slug = lessons[index - 1].slug if index > 0 else None
    next_slug = lessons[index + 1].slug if index + 1 < len(lessons) else None
    return ResolvedLesson(lessons[index], previous_slug, next_slug)


def resolve_lesson(structure: CourseStructure, slug: str) -> ResolvedLesson:
    """
    Find a visible lesson by slug and work out its neighbours.

    If the same slug appears twice, the first match wins.

    Args:
        structure: Loaded course structure
        slug: Lesson slug from the request path

    Returns:
        ResolvedLesson with previous/next slugs (None at either end)

    Raises:
        LessonNotFoundError: If no visible lesson has this slug
    """
    lessons = visible_lessons(structure)
    for index, lesson in enumerate(lessons):
        if lesson.slug == slug:
            return _neighbours(lessons, index)
    raise LessonNotFoundError(slug)


def iter_resolved_lessons(structure: CourseStructure) -> Iterator[ResolvedLesson]:
    """Yield every visible lesson with its neighbours, in order."""
    lessons = visible_lessons(structure)
    for index in range(len(lessons)):
        yield _neighbours(lessons, index)
