# config_utils.py - YAML Configuration System for coursesite
"""
coursesite configuration utilities with YAML file support.

Configuration Resolution Order (highest to lowest priority):
1. Environment variables (COURSESITE_ROOT, COURSESITE_CONTENT_DIR, etc.)
2. coursesite.yaml in the site root
3. ~/.coursesite/config.yaml (global defaults)

Usage:
    from coursesite.config_utils import get_config

    config = get_config()
    print(config.structure_path)
    print(config.content_path)
"""

import logging
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

import yaml

from coursesite.errors import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_MARKDOWN_EXTENSIONS = ["tables", "fenced_code", "toc"]


@dataclass
class SiteConfig:
    """Complete coursesite configuration"""
    # Paths (relative ones resolve against site_root)
    site_root: Path = field(default_factory=Path.cwd)
    structure_file: str = "course-structure.json"
    content_dir: str = "content"
    assets_dir: str = "assets"

    # Content cleanup and rendering
    legacy_asset_prefix: str = "../assets/"
    markdown_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_MARKDOWN_EXTENSIONS))

    # Public site and survey form
    site_url: str = "https://www.soldev.app/course"
    survey_form_id: str = "IPH0UGz7"

    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000

    # Extra settings from config file
    extra: Dict[str, Any] = field(default_factory=dict)

    # Track where values came from (for debugging)
    _sources: Dict[str, str] = field(default_factory=dict)

    def _resolve(self, value: str) -> Path:
        path = Path(value).expanduser()
        if path.is_absolute():
            return path
        return self.site_root / path

    @property
    def structure_path(self) -> Path:
        return self._resolve(self.structure_file)

    @property
    def content_path(self) -> Path:
        return self._resolve(self.content_dir)

    @property
    def assets_path(self) -> Path:
        return self._resolve(self.assets_dir)


def _string_list(value: Any) -> List[str]:
    """A single name or a list of names; anything else is a config error"""
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigurationError(
        message=f"Expected a name or a list of names, got {value!r}",
        suggestion="e.g.\n  markdown_extensions:\n    - tables\n    - fenced_code",
    )


class ConfigLoader:
    """Load configuration from multiple sources"""

    # YAML key -> (attribute, converter)
    MAPPINGS = {
        "structure_file": ("structure_file", str),
        "content_dir": ("content_dir", str),
        "assets_dir": ("assets_dir", str),
        "legacy_asset_prefix": ("legacy_asset_prefix", str),
        "markdown_extensions": ("markdown_extensions", _string_list),
        "site_url": ("site_url", str),
        "survey_form_id": ("survey_form_id", str),
    }

    ENV_VARS = {
        "COURSESITE_STRUCTURE": "structure_file",
        "COURSESITE_CONTENT_DIR": "content_dir",
        "COURSESITE_ASSETS_DIR": "assets_dir",
        "COURSESITE_ASSET_PREFIX": "legacy_asset_prefix",
        "COURSESITE_SITE_URL": "site_url",
        "COURSESITE_FORM_ID": "survey_form_id",
    }

    def __init__(self, site_dir: Optional[Path] = None):
        env_root = os.environ.get("COURSESITE_ROOT")
        if site_dir:
            root = Path(site_dir)
        elif env_root:
            root = Path(env_root)
        else:
            root = Path.cwd()
        self.site_dir = root.expanduser().resolve()
        self.config = SiteConfig(site_root=self.site_dir)
        if env_root and not site_dir:
            self.config._sources["site_root"] = "env:COURSESITE_ROOT"

    def load(self) -> SiteConfig:
        """Load configuration from all sources in priority order"""
        # Load in reverse priority (lowest first, higher overwrites)
        self._load_global_config()
        self._load_yaml_config()
        self._load_env_vars()
        return self.config

    def _load_global_config(self):
        """Load ~/.coursesite/config.yaml if it exists"""
        global_config = Path.home() / ".coursesite" / "config.yaml"
        if global_config.is_file():
            self._load_yaml_file(global_config, "global")

    def _load_yaml_config(self):
        """Load coursesite.yaml from site root"""
        yaml_path = self.site_dir / "coursesite.yaml"
        if yaml_path.is_file():
            self._load_yaml_file(yaml_path, "coursesite.yaml")

    def _load_yaml_file(self, path: Path, source_name: str):
        """Load settings from a YAML file"""
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                message=f"Could not parse {path.name}",
                suggestion="Fix the YAML syntax or remove the file",
                context={"file": str(path)},
                cause=e,
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"{path.name} must contain a mapping of settings",
                context={"file": str(path), "found": type(data).__name__},
            )

        for yaml_key, (attr, convert) in self.MAPPINGS.items():
            if yaml_key in data:
                setattr(self.config, attr, convert(data[yaml_key]))
                self.config._sources[attr] = source_name

        # Handle nested server settings
        if "server" in data and isinstance(data["server"], dict):
            server = data["server"]
            if "host" in server:
                self.config.host = str(server["host"])
                self.config._sources["host"] = source_name
            if "port" in server:
                self.config.port = int(server["port"])
                self.config._sources["port"] = source_name

        # Store any extra settings
        known_keys = set(self.MAPPINGS) | {"server"}
        for key, value in data.items():
            if key not in known_keys:
                self.config.extra[key] = value

        logger.debug("Loaded configuration from %s", path)

    def _load_env_vars(self):
        """Load from environment variables (highest priority)"""
        for env_name, attr in self.ENV_VARS.items():
            value = os.environ.get(env_name)
            if value:
                setattr(self.config, attr, value)
                self.config._sources[attr] = f"env:{env_name}"

        port = os.environ.get("COURSESITE_PORT")
        if port:
            try:
                self.config.port = int(port)
            except ValueError as e:
                raise ConfigurationError(
                    message=f"COURSESITE_PORT must be an integer, got '{port}'",
                    cause=e,
                ) from e
            self.config._sources["port"] = "env:COURSESITE_PORT"


# ============================================================================
# Public API
# ============================================================================

def get_config(site_dir: Optional[Path] = None) -> SiteConfig:
    """
    Get complete coursesite configuration.

    Args:
        site_dir: Site directory (defaults to COURSESITE_ROOT, then cwd)

    Returns:
        SiteConfig with all settings resolved
    """
    loader = ConfigLoader(site_dir)
    return loader.load()


def create_config_template(include_comments: bool = True) -> str:
    """
    Generate a coursesite.yaml template.

    Args:
        include_comments: Whether to include explanatory comments

    Returns:
        YAML string ready to write to file
    """
    if include_comments:
        return '''# coursesite configuration file

# Course structure (tracks -> units -> lessons), JSON or YAML
structure_file: course-structure.json

# One markdown file per lesson: <content_dir>/<slug>.md
content_dir: content

# Images and other files linked from lessons
assets_dir: assets

# Removed from lesson text before rendering
legacy_asset_prefix: "../assets/"

# Python-Markdown extensions
markdown_extensions:
  - tables
  - fenced_code
  - toc

# Public lesson URLs, used by the objectives table
site_url: https://www.soldev.app/course

# Feedback survey form
survey_form_id: IPH0UGz7

server:
  host: 127.0.0.1
  port: 8000
'''
    else:
        return '''structure_file: course-structure.json
content_dir: content
assets_dir: assets
legacy_asset_prefix: "../assets/"
site_url: https://www.soldev.app/course
survey_form_id: IPH0UGz7
server:
  host: 127.0.0.1
  port: 8000
'''
