#!/usr/bin/env python3
"""
validate.py - Check the course structure and lesson content before serving

Usage:
    coursesite validate [--verbose]

Checks:
- Course structure file exists and matches the schema
- No two visible lessons share a slug
- Every visible lesson has a content file
- Every content file's front matter is valid YAML
- Content files that no lesson refers to (warning)
- Hidden lessons without content (info, shown with --verbose)
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional, Dict
from enum import Enum

import click

from coursesite.config_utils import SiteConfig
from coursesite.content import ContentStore
from coursesite.course_structure import CourseStructure, find_duplicate_slugs, load_course_structure
from coursesite.errors import CourseStructureError, FrontmatterError
from coursesite.icons import SUCCESS, ERROR, WARNING, INFO
from coursesite.normalize import split_frontmatter


class Severity(Enum):
    ERROR = "error"      # Lesson pages will 404 or fail
    WARNING = "warning"  # Probably a mistake, site still works
    INFO = "info"        # Suggestion for improvement


@dataclass
class Issue:
    """A single validation issue"""
    file: Path
    message: str
    severity: Severity = Severity.ERROR
    suggestion: Optional[str] = None

    def __str__(self):
        icon = {"error": ERROR, "warning": WARNING, "info": INFO}[self.severity.value]
        msg = f"  {icon} {self.message}"

        if self.suggestion:
            msg += f"\n    -> {self.suggestion}"

        return msg


@dataclass
class ValidationResult:
    """Results from validating a site"""
    issues: List[Issue] = field(default_factory=list)
    files_checked: int = 0

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add(self, issue: Issue):
        self.issues.append(issue)

    def summary(self) -> str:
        e = len(self.errors)
        w = len(self.warnings)

        if e == 0 and w == 0:
            return f"{SUCCESS} All {self.files_checked} files valid!"

        parts = []
        if e > 0:
            parts.append(f"{e} error{'s' if e != 1 else ''}")
        if w > 0:
            parts.append(f"{w} warning{'s' if w != 1 else ''}")

        return f"Found {', '.join(parts)} in {self.files_checked} files checked."


class SiteValidator:
    """Validates a course site"""

    def __init__(self, config: SiteConfig):
        self.config = config
        self.store = ContentStore(config.content_path)

    def validate(self) -> ValidationResult:
        """Run all validations"""
        result = ValidationResult()
        structure_path = self.config.structure_path

        try:
            structure = load_course_structure(structure_path)
        except CourseStructureError as e:
            result.add(Issue(
                file=structure_path,
                message=e.message,
                suggestion=e.suggestion,
            ))
            for problem in e.context.get("problems", []):
                result.add(Issue(file=structure_path, message=problem))
            return result
        result.files_checked += 1

        self._validate_slugs(structure, result)
        self._validate_lesson_files(structure, result)
        self._validate_content_files(structure, result)
        return result

    def _validate_slugs(self, structure: CourseStructure, result: ValidationResult):
        for slug in find_duplicate_slugs(structure):
            result.add(Issue(
                file=self.config.structure_path,
                message=f"Slug '{slug}' is used by more than one visible lesson",
                suggestion="Only the first lesson with this slug can be reached; rename or hide the others",
            ))

    def _validate_lesson_files(self, structure: CourseStructure, result: ValidationResult):
        for lesson in structure.iter_lessons():
            if self.store.exists(lesson.slug):
                continue
            path = self.store.path_for(lesson.slug)
            if lesson.hidden:
                result.add(Issue(
                    file=path,
                    message=f"Hidden lesson '{lesson.slug}' has no content file",
                    severity=Severity.INFO,
                ))
            else:
                result.add(Issue(
                    file=path,
                    message=f"Lesson '{lesson.slug}' has no content file",
                    suggestion=f"Create {path.name} or mark the lesson hidden",
                ))

    def _validate_content_files(self, structure: CourseStructure, result: ValidationResult):
        known = {lesson.slug for lesson in structure.iter_lessons()}
        for path in self.store.iter_content_files():
            result.files_checked += 1
            try:
                split_frontmatter(path.read_text(encoding="utf-8"), path)
            except FrontmatterError as e:
                result.add(Issue(
                    file=path,
                    message=f"Invalid frontmatter: {e.cause}",
                    suggestion=e.suggestion,
                ))

            if path.stem not in known:
                result.add(Issue(
                    file=path,
                    message=f"No lesson in {self.config.structure_path.name} uses '{path.stem}'",
                    severity=Severity.WARNING,
                ))


def validate_site(config: SiteConfig) -> ValidationResult:
    """Main entry point for validation"""
    validator = SiteValidator(config)
    return validator.validate()


def print_results(result: ValidationResult, verbose: bool = False):
    """Print validation results to console"""
    # Group by file
    by_file: Dict[Path, List[Issue]] = {}
    for issue in result.issues:
        if issue.severity == Severity.INFO and not verbose:
            continue
        by_file.setdefault(issue.file, []).append(issue)

    # Print each file's issues
    for file_path, issues in sorted(by_file.items()):
        click.echo(f"\n{file_path}")
        for issue in issues:
            click.echo(str(issue))

    # Print summary
    click.echo(f"\n{result.summary()}")

    if result.is_valid:
        click.echo(f"{SUCCESS} Site is ready to serve!")
    else:
        click.echo(f"{ERROR} Fix errors before serving.")
