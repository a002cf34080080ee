# tests/test_survey_links.py
"""
Tests for survey_links.py - feedback form links appended to lessons
"""
import json
import pytest
import requests

from coursesite.errors import ConfigurationError
from coursesite.survey_links import (
    SurveyChoice,
    survey_link,
    feedback_prompt,
    load_choices,
    extract_choices,
    fetch_choices,
    append_survey_links,
)


SIGNER_CHOICE = SurveyChoice(
    id="r3hBHTCagbdT",
    ref="89d367b4-5102-4237-a7f4-4f96050fe57e",
    label="signer-auth",
)

FORM_DEFINITION = {
    "id": "IPH0UGz7",
    "fields": [
        {
            "type": "group",
            "properties": {
                "fields": [
                    {
                        "type": "dropdown",
                        "properties": {
                            "choices": [
                                {"id": "r3hBHTCagbdT", "ref": "89d367b4", "label": "signer-auth"},
                                {"id": "Wq1m2Y9pLsKe", "ref": "a1b2c3d4", "label": "pda"},
                            ]
                        },
                    }
                ]
            },
        },
        {"type": "rating", "properties": {"steps": 5}},
    ],
}


class TestLinks:
    def test_survey_link(self):
        assert survey_link("IPH0UGz7", "89d367b4") == (
            "https://form.typeform.com/to/IPH0UGz7#answers-lesson=89d367b4"
        )

    def test_feedback_prompt(self):
        prompt = feedback_prompt("https://example.com/form")
        assert prompt.startswith("## Completed the lab?\n\n")
        assert prompt.endswith("[tell us what you thought of this lesson](https://example.com/form)!")


class TestLoadChoices:
    """Tests for reading choices from YAML/JSON files"""

    def test_yaml(self, tmp_path):
        path = tmp_path / "choices.yaml"
        path.write_text(
            "- id: r3hBHTCagbdT\n"
            "  ref: 89d367b4-5102-4237-a7f4-4f96050fe57e\n"
            "  label: signer-auth\n"
        )
        assert load_choices(path) == [SIGNER_CHOICE]

    def test_json(self, tmp_path):
        path = tmp_path / "choices.json"
        path.write_text(json.dumps([
            {"id": SIGNER_CHOICE.id, "ref": SIGNER_CHOICE.ref, "label": SIGNER_CHOICE.label}
        ]))
        assert load_choices(path) == [SIGNER_CHOICE]

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "choices.yaml"
        path.write_text("id: abc\n")
        with pytest.raises(ConfigurationError, match="list of choices"):
            load_choices(path)

    def test_missing_field(self, tmp_path):
        path = tmp_path / "choices.yaml"
        path.write_text("- id: abc\n  label: pda\n")
        with pytest.raises(ConfigurationError, match="Invalid survey choice"):
            load_choices(path)

    def test_bad_json(self, tmp_path):
        path = tmp_path / "choices.json"
        path.write_text("[{")
        with pytest.raises(ConfigurationError) as exc_info:
            load_choices(path)
        assert isinstance(exc_info.value.cause, json.JSONDecodeError)


class TestFormDefinition:
    def test_extract_nested_choices(self):
        choices = extract_choices(FORM_DEFINITION)
        assert [choice.label for choice in choices] == ["signer-auth", "pda"]
        assert choices[1].ref == "a1b2c3d4"

    def test_extract_empty_form(self):
        assert extract_choices({}) == []

    def test_fetch_choices(self, mocker):
        """Should GET the public form definition and extract its choices"""
        session = mocker.Mock()
        session.get.return_value.json.return_value = FORM_DEFINITION

        choices = fetch_choices("IPH0UGz7", session=session)

        session.get.assert_called_once_with("https://form.typeform.com/forms/IPH0UGz7", timeout=30)
        session.get.return_value.raise_for_status.assert_called_once()
        assert len(choices) == 2

    def test_fetch_uses_requests_by_default(self, mocker):
        get = mocker.patch("coursesite.survey_links.requests.get")
        get.return_value.json.return_value = FORM_DEFINITION

        fetch_choices("FORM", timeout=5)

        get.assert_called_once_with("https://form.typeform.com/forms/FORM", timeout=5)

    def test_fetch_http_error_propagates(self, mocker):
        session = mocker.Mock()
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("404")

        with pytest.raises(requests.HTTPError):
            fetch_choices("missing", session=session)


class TestAppendSurveyLinks:
    """Tests for appending the feedback prompt to lesson files"""

    def test_appends_prompt(self, content_store):
        result = append_survey_links(content_store, [SIGNER_CHOICE], "IPH0UGz7")

        assert result.appended == ["signer-auth"]
        text = content_store.path_for("signer-auth").read_text()
        assert text.startswith("---\ntitle: Signer authorization")
        assert text.endswith(
            "\n\n## Completed the lab?\n\nPush your code to GitHub and "
            "[tell us what you thought of this lesson]"
            "(https://form.typeform.com/to/IPH0UGz7#answers-lesson=89d367b4-5102-4237-a7f4-4f96050fe57e)!"
        )

    def test_second_run_does_not_duplicate(self, content_store):
        append_survey_links(content_store, [SIGNER_CHOICE], "IPH0UGz7")
        once = content_store.path_for("signer-auth").read_text()

        result = append_survey_links(content_store, [SIGNER_CHOICE], "IPH0UGz7")

        assert result.appended == []
        assert result.already_linked == ["signer-auth"]
        assert content_store.path_for("signer-auth").read_text() == once

    def test_missing_lesson_file(self, content_store):
        choice = SurveyChoice(id="x", ref="y", label="owner-checks")
        result = append_survey_links(content_store, [choice], "IPH0UGz7")

        assert result.missing == ["owner-checks"]
        assert not content_store.path_for("owner-checks").exists()

    def test_dry_run_writes_nothing(self, content_store):
        before = content_store.path_for("signer-auth").read_text()

        result = append_survey_links(content_store, [SIGNER_CHOICE], "IPH0UGz7", dry_run=True)

        assert result.appended == ["signer-auth"]
        assert content_store.path_for("signer-auth").read_text() == before
