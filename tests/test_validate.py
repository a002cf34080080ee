# tests/test_validate.py
"""
Tests for validate.py - site checks before serving
"""
import json

from coursesite.config_utils import SiteConfig
from coursesite.validate import Severity, validate_site, print_results


def messages(result, severity=None):
    return [
        issue.message for issue in result.issues
        if severity is None or issue.severity == severity
    ]


class TestValidateSite:
    """Tests for SiteValidator"""

    def test_sample_site(self, site_config):
        """owner-checks has no file; old-lesson is hidden and has none either"""
        result = validate_site(site_config)

        assert not result.is_valid
        assert messages(result, Severity.ERROR) == ["Lesson 'owner-checks' has no content file"]
        assert messages(result, Severity.INFO) == ["Hidden lesson 'old-lesson' has no content file"]
        assert result.files_checked == 5

    def test_complete_site_is_valid(self, site_config, sample_site):
        (sample_site / "content" / "owner-checks.md").write_text("Check owners.")
        result = validate_site(site_config)

        assert result.is_valid
        assert result.warnings == []

    def test_missing_structure(self, temp_site_dir):
        result = validate_site(SiteConfig(site_root=temp_site_dir))

        assert not result.is_valid
        assert "Course structure file not found" in result.errors[0].message

    def test_schema_problems_listed(self, temp_site_dir):
        (temp_site_dir / "course-structure.json").write_text(
            json.dumps({"tracks": [{"title": "T", "units": [{"title": "U", "lessons": [{"title": "No slug"}]}]}]})
        )
        result = validate_site(SiteConfig(site_root=temp_site_dir))

        assert not result.is_valid
        assert len(result.errors) >= 2

    def test_duplicate_slugs(self, temp_site_dir):
        (temp_site_dir / "course-structure.json").write_text(json.dumps({
            "tracks": [{"title": "T", "units": [{"title": "U", "lessons": [
                {"title": "A", "slug": "pda"},
                {"title": "B", "slug": "pda"},
            ]}]}]
        }))
        (temp_site_dir / "content" / "pda.md").write_text("PDAs")

        result = validate_site(SiteConfig(site_root=temp_site_dir))

        assert messages(result, Severity.ERROR) == ["Slug 'pda' is used by more than one visible lesson"]

    def test_invalid_front_matter(self, site_config, sample_site):
        (sample_site / "content" / "signer-auth.md").write_text("---\ntitle: [oops\n---\nBody")
        result = validate_site(site_config)

        assert any(message.startswith("Invalid frontmatter") for message in messages(result, Severity.ERROR))

    def test_unreferenced_content_file(self, site_config, sample_site):
        (sample_site / "content" / "draft.md").write_text("# Draft")
        result = validate_site(site_config)

        assert messages(result, Severity.WARNING) == ["No lesson in course-structure.json uses 'draft'"]


class TestPrintResults:
    def test_hides_info_unless_verbose(self, site_config, capsys):
        result = validate_site(site_config)

        print_results(result)
        quiet = capsys.readouterr().out
        print_results(result, verbose=True)
        loud = capsys.readouterr().out

        assert "old-lesson" not in quiet
        assert "old-lesson" in loud
        assert "Fix errors before serving." in quiet

    def test_summary_counts(self, site_config):
        result = validate_site(site_config)
        assert result.summary() == "Found 1 error in 5 files checked."
