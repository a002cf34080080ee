# tests/conftest.py
"""
Pytest configuration and shared fixtures for coursesite tests
"""
import logging
import pytest
import json
import tempfile
import shutil
from pathlib import Path
from typing import Generator

from coursesite.config_utils import SiteConfig
from coursesite.content import ContentStore
from coursesite.course_structure import parse_course_structure, CourseStructure


SAMPLE_STRUCTURE = {
    "tracks": [
        {
            "title": "Introduction to Solana",
            "units": [
                {
                    "title": "Client interaction",
                    "lessons": [
                        {
                            "title": "Cryptography and the Solana Network",
                            "slug": "intro-to-cryptography",
                            "number": 1,
                            "objectives": ["Understand keypairs"],
                        },
                        {
                            "title": "Retired lesson",
                            "slug": "old-lesson",
                            "hidden": True,
                        },
                        {
                            "title": "Read data from the network",
                            "slug": "intro-to-reading-data",
                            "lab": "https://github.com/example/reading-data-lab",
                        },
                    ],
                },
                {
                    "title": "Writing",
                    "lessons": [
                        {
                            "title": "Write data to the network",
                            "slug": "intro-to-writing-data",
                            "translations": {"es": "Escribir datos"},
                        },
                    ],
                },
            ],
        },
        {
            "title": "Program security",
            "units": [
                {
                    "title": "Checks",
                    "lessons": [
                        {"title": "Signer authorization", "slug": "signer-auth"},
                        {"title": "Owner checks", "slug": "owner-checks"},
                    ],
                },
            ],
        },
    ]
}

VISIBLE_SLUGS = [
    "intro-to-cryptography",
    "intro-to-reading-data",
    "intro-to-writing-data",
    "signer-auth",
    "owner-checks",
]

CRYPTOGRAPHY_MD = """---
title: Cryptography and the Solana Network
objectives:
  - Understand symmetric and asymmetric cryptography
  - Explain keypairs
---

# Summary

Keypairs are made of a public and a secret key.
Public keys are addresses.

# Lesson

![Keypair diagram](../assets/keys.png)

Some **bold** lesson text.
"""

READING_DATA_MD = """# Summary

Reading data is free.

# Lesson

Use the `getBalance` method.
"""

WRITING_DATA_MD = """---
title: Write data to the network
objectives:
  - Send transactions
---

Transactions cost fees. See ![fees](../assets/fees.png).
"""

SIGNER_AUTH_MD = """---
title: Signer authorization
---

Check `is_signer`.
"""


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path_factory):
    """Keep the user's real config and COURSESITE_* variables out of tests"""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for name in (
        "COURSESITE_ROOT",
        "COURSESITE_STRUCTURE",
        "COURSESITE_CONTENT_DIR",
        "COURSESITE_ASSETS_DIR",
        "COURSESITE_ASSET_PREFIX",
        "COURSESITE_SITE_URL",
        "COURSESITE_FORM_ID",
        "COURSESITE_PORT",
    ):
        monkeypatch.delenv(name, raising=False)

    # setup_logging() replaces root handlers; put them back afterwards
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def temp_site_dir() -> Generator[Path, None, None]:
    """Create an empty site directory structure"""
    tmpdir = Path(tempfile.mkdtemp())

    # Create standard structure
    (tmpdir / "content").mkdir()
    (tmpdir / "assets").mkdir()

    yield tmpdir

    # Cleanup
    shutil.rmtree(tmpdir)


@pytest.fixture
def sample_site(temp_site_dir: Path) -> Path:
    """Site with course-structure.json, lesson files and one asset

    owner-checks is deliberately left without a content file.
    """
    (temp_site_dir / "course-structure.json").write_text(
        json.dumps(SAMPLE_STRUCTURE, indent=2), encoding="utf-8"
    )

    content = temp_site_dir / "content"
    (content / "intro-to-cryptography.md").write_text(CRYPTOGRAPHY_MD, encoding="utf-8")
    (content / "intro-to-reading-data.md").write_text(READING_DATA_MD, encoding="utf-8")
    (content / "intro-to-writing-data.md").write_text(WRITING_DATA_MD, encoding="utf-8")
    (content / "signer-auth.md").write_text(SIGNER_AUTH_MD, encoding="utf-8")

    (temp_site_dir / "assets" / "keys.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    return temp_site_dir


@pytest.fixture
def site_config(sample_site: Path) -> SiteConfig:
    return SiteConfig(site_root=sample_site)


@pytest.fixture
def content_store(sample_site: Path) -> ContentStore:
    return ContentStore(sample_site / "content")


@pytest.fixture
def structure() -> CourseStructure:
    return parse_course_structure(SAMPLE_STRUCTURE)


def make_structure(*lessons: dict) -> CourseStructure:
    """Build a one-track, one-unit structure from lesson dicts"""
    return parse_course_structure({
        "tracks": [{"title": "Track", "units": [{"title": "Unit", "lessons": list(lessons)}]}]
    })
