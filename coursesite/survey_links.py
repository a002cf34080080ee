#!/usr/bin/env python3
"""
# coursesite
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

survey_links.py

Append a "tell us what you thought" prompt to each lesson, linking to the
feedback form with that lesson preselected.

Each form choice has an id, a ref and a label; the label is the lesson slug.
The preselected link is:

    https://form.typeform.com/to/<FORM_ID>#answers-lesson=<ref>

Choices come from a YAML/JSON file (a list of {id, ref, label} mappings) or
are fetched from the public form definition.

Usage:
    coursesite survey-links --choices survey-choices.yaml [--dry-run]
    coursesite survey-links --fetch [--form-id IPH0UGz7]
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import requests
import yaml

from coursesite.content import ContentStore
from coursesite.errors import ConfigurationError


logger = logging.getLogger(__name__)

FORM_DEFINITION_URL = "https://form.typeform.com/forms/{form_id}"
FORM_LINK_URL = "https://form.typeform.com/to/{form_id}#answers-lesson={ref}"

PROMPT_TEMPLATE = (
    "## Completed the lab?\n\n"
    "Push your code to GitHub and "
    "[tell us what you thought of this lesson]({link})!"
)


@dataclass(frozen=True)
class SurveyChoice:
    """One preselectable answer of the form's lesson question"""
    id: str
    ref: str
    label: str


@dataclass
class SurveyLinkResult:
    """What append_survey_links did, per lesson slug"""
    appended: List[str] = field(default_factory=list)
    already_linked: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


# =============================================================================
# Links
# =============================================================================

def survey_link(form_id: str, ref: str) -> str:
    return FORM_LINK_URL.format(form_id=form_id, ref=ref)


def feedback_prompt(link: str) -> str:
    return PROMPT_TEMPLATE.format(link=link)


# =============================================================================
# Choices
# =============================================================================

def _choice_from_mapping(item: Any, source: str) -> SurveyChoice:
    if not isinstance(item, dict) or not all(item.get(k) for k in ("id", "ref", "label")):
        raise ConfigurationError(
            message=f"Invalid survey choice in {source}",
            suggestion="Each choice needs id, ref and label, e.g.\n"
                       '  - {id: "r3hBHTCagbdT", ref: "89d367b4-...", label: "pda"}',
            context={"choice": item},
        )
    return SurveyChoice(id=str(item["id"]), ref=str(item["ref"]), label=str(item["label"]))


def load_choices(path: Path) -> List[SurveyChoice]:
    """
    Load survey choices from a YAML or JSON file.

    Raises:
        ConfigurationError: If the file is not a list of {id, ref, label}
    """
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            message=f"Could not parse {path.name}",
            context={"file": str(path)},
            cause=e,
        ) from e

    if not isinstance(data, list):
        raise ConfigurationError(
            message=f"{path.name} must contain a list of choices",
            context={"file": str(path), "found": type(data).__name__},
        )
    return [_choice_from_mapping(item, path.name) for item in data]


def extract_choices(form: Dict[str, Any]) -> List[SurveyChoice]:
    """Collect every choice of every (possibly grouped) field of a form definition."""
    choices: List[SurveyChoice] = []

    def walk(fields: Iterable[Dict[str, Any]]) -> None:
        for form_field in fields:
            properties = form_field.get("properties") or {}
            for item in properties.get("choices") or []:
                choices.append(_choice_from_mapping(item, "form definition"))
            walk(properties.get("fields") or [])

    walk(form.get("fields") or [])
    return choices


def fetch_choices(
    form_id: str,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
) -> List[SurveyChoice]:
    """
    Fetch the public form definition and extract its choices.

    HTTP errors propagate as requests exceptions.
    """
    url = FORM_DEFINITION_URL.format(form_id=form_id)
    http = session or requests
    response = http.get(url, timeout=timeout)
    response.raise_for_status()
    choices = extract_choices(response.json())
    logger.info("Fetched %d choices from %s", len(choices), url)
    return choices


# =============================================================================
# Appending
# =============================================================================

def append_survey_links(
    store: ContentStore,
    choices: Iterable[SurveyChoice],
    form_id: str,
    dry_run: bool = False,
) -> SurveyLinkResult:
    """
    Append the feedback prompt to each choice's lesson file.

    Files that already contain their link are left alone, so running this
    twice does not duplicate the prompt. Lessons without a content file are
    reported and skipped.
    """
    result = SurveyLinkResult()

    for choice in choices:
        if not store.exists(choice.label):
            logger.warning("No content file for survey choice '%s'", choice.label)
            result.missing.append(choice.label)
            continue

        path = store.path_for(choice.label)
        link = survey_link(form_id, choice.ref)
        old_content = path.read_text(encoding="utf-8")

        if link in old_content:
            logger.info("Already linked: %s", path.name)
            result.already_linked.append(choice.label)
            continue

        if not dry_run:
            path.write_text(f"{old_content}\n\n{feedback_prompt(link)}", encoding="utf-8")
        logger.info("%s %s", "Would append to" if dry_run else "Appended to", path.name)
        result.appended.append(choice.label)

    return result
