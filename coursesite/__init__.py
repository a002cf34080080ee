"""
coursesite - Markdown course lessons as a website

Loads a course structure of tracks, units and lessons, and serves each
lesson's markdown file as an HTML page with previous/next navigation.

Core Concept: course-structure.json decides what is shown and in which
order; content/<slug>.md holds each lesson's text.
"""

__version__ = "1.0.0"
__author__ = "Dale Chapman"
__license__ = "MIT"

# Make key utilities easily importable
from .config_utils import get_config, SiteConfig
from .errors import CourseSiteError, ConfigurationError, NotFoundError

__all__ = [
    "__version__",
    "get_config",
    "SiteConfig",
    "CourseSiteError",
    "ConfigurationError",
    "NotFoundError",
]
