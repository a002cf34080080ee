# coursesite
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

# errors.py
"""
Custom exception classes with improved error messages for coursesite

All exceptions include:
- Clear error description
- Actionable suggestions
- Relevant context

Only NotFoundError (and its subclasses) is translated into a "not found"
page. Everything else propagates to the caller unchanged.
"""
from pathlib import Path
from typing import Optional, Dict, Any


class CourseSiteError(Exception):
    """Base exception for all coursesite errors"""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        self.cause = cause
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error with all details"""
        lines = [
            "",
            "=" * 70,
            f"❌ {self.__class__.__name__}",
            "=" * 70,
            "",
            self.message,
        ]

        if self.context:
            lines.append("")
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append("")
            lines.append("💡 Suggestion:")
            lines.append(f"  {self.suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        lines.append("")
        lines.append("=" * 70)
        lines.append("")

        return "\n".join(lines)


class ConfigurationError(CourseSiteError):
    """Configuration is missing or invalid"""
    pass


class CourseStructureError(CourseSiteError):
    """Course structure file is missing or malformed"""
    pass


class FrontmatterError(CourseSiteError):
    """Error parsing frontmatter"""
    pass


class NotFoundError(CourseSiteError):
    """Requested lesson page does not exist"""
    pass


class LessonNotFoundError(NotFoundError):
    """No visible lesson has the requested slug"""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(
            message=f"No visible lesson with slug '{slug}'",
            context={"slug": slug},
        )


class ContentNotFoundError(NotFoundError):
    """Lesson exists in the course structure but has no content file"""

    def __init__(self, slug: str, path: Path, cause: Optional[Exception] = None):
        self.slug = slug
        self.path = path
        super().__init__(
            message=f"Content file for lesson '{slug}' not found",
            suggestion=f"Create {path.name} in the content directory",
            context={"slug": slug, "path": str(path)},
            cause=cause,
        )


# Specific error factory functions

def invalid_structure_error(
    file_path: Path,
    problems: list[str],
    cause: Optional[Exception] = None
) -> CourseStructureError:
    """Create error for a course structure file that failed validation"""
    return CourseStructureError(
        message=f"Invalid course structure in {file_path.name}",
        suggestion=(
            "Each track needs a title and units; each unit a title and lessons;\n"
            "  each lesson a title and a slug:\n"
            '  {"tracks": [{"title": "...", "units": [{"title": "...",\n'
            '    "lessons": [{"title": "...", "slug": "..."}]}]}]}'
        ),
        context={
            "file": str(file_path),
            "problems": problems,
        },
        cause=cause,
    )


def invalid_frontmatter_error(
    file_path: Path,
    cause: Optional[Exception] = None
) -> FrontmatterError:
    """Create error for front matter that is not valid YAML"""
    return FrontmatterError(
        message=f"Invalid frontmatter in {file_path.name}",
        suggestion=(
            "Check the YAML between the opening and closing '---' lines:\n"
            "  ---\n"
            '  title: "Lesson title"\n'
            "  objectives:\n"
            '    - "First objective"\n'
            "  ---"
        ),
        context={"file": str(file_path)},
        cause=cause,
    )
