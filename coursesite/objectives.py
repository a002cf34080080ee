#!/usr/bin/env python3
"""
# coursesite
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

objectives.py

Extract titles, objectives and summaries from every lesson file into one
markdown table:

    # Course Objectives and Links
    |title|link|objectives|summaryParagraph|
    |-----|----|----------|----------------|
    |Program Derived Addresses|https://www.soldev.app/course/pda|Explain PDAs, ...| PDAs are ... |

The summary paragraph is the text between "# Summary" and "# Lesson" with
newlines flattened to spaces. Files without a summary section are skipped.

Usage:
    coursesite objectives [--output course-objectives-and-links.md]
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from coursesite.content import ContentStore
from coursesite.normalize import split_frontmatter


logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "course-objectives-and-links.md"

SUMMARY_HEADING = "# Summary"
LESSON_HEADING = "# Lesson"

TABLE_HEADER = [
    "# Course Objectives and Links",
    "|title|link|objectives|summaryParagraph|",
    "|-----|----|----------|----------------|",
]


@dataclass
class ObjectiveRow:
    title: str
    link: str
    objectives: List[str]
    summary: str

    def to_markdown(self) -> str:
        return f"|{self.title}|{self.link}|{', '.join(self.objectives)}|{self.summary}|"


@dataclass
class ObjectivesReport:
    rows: List[ObjectiveRow] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def lines(self) -> List[str]:
        return TABLE_HEADER + [row.to_markdown() for row in self.rows]


def extract_summary(body: str) -> Optional[str]:
    """Return the flattened text between the summary and lesson headings, if any."""
    if SUMMARY_HEADING not in body:
        return None
    after_summary = body.split(SUMMARY_HEADING, 1)[1]
    return after_summary.split(LESSON_HEADING, 1)[0].replace("\n", " ")


def read_row(path: Path, site_url: str) -> Optional[ObjectiveRow]:
    """Build the table row for one lesson file, or None if it has no summary."""
    metadata, body = split_frontmatter(path.read_text(encoding="utf-8"), path)

    summary = extract_summary(body)
    if summary is None:
        return None

    objectives = metadata.get("objectives") or []
    if isinstance(objectives, str):
        objectives = [objectives]

    return ObjectiveRow(
        title=str(metadata.get("title", "")),
        link=f"{site_url.rstrip('/')}/{path.name.split('.')[0]}",
        objectives=[str(item) for item in objectives],
        summary=summary,
    )


def collect_objectives(store: ContentStore, site_url: str) -> ObjectivesReport:
    report = ObjectivesReport()
    for path in store.iter_content_files():
        row = read_row(path, site_url)
        if row is None:
            logger.warning("Bad formatting in %s: no '%s' section", path.name, SUMMARY_HEADING)
            report.skipped.append(path.name)
            continue
        report.rows.append(row)
    return report


def write_objectives_table(store: ContentStore, site_url: str, output: Path) -> ObjectivesReport:
    """Collect rows from every lesson file and write the table to output."""
    report = collect_objectives(store, site_url)
    output.write_text("\n".join(report.lines()), encoding="utf-8")
    logger.info("Wrote %d rows to %s", len(report.rows), output)
    return report
