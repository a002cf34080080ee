#!/usr/bin/env python3
"""
icons.py - Centralized icon/emoji definitions for coursesite CLI output

Usage:
    from coursesite.icons import icons
    print(f"{icons.SUCCESS} Task completed!")

Or import individual icons:
    from coursesite.icons import SUCCESS, WARNING, ERROR
    print(f"{SUCCESS} Done!")

All unicode characters are defined here once. Never edit unicode
characters in other files - import from this module instead.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Icons:
    """
    Centralized icon definitions.

    Categories:
    - Status: SUCCESS, ERROR, WARNING, INFO, DEBUG, SKIP
    - Content: TRACK, UNIT, LESSON, HIDDEN, LAB
    - Misc: LINK, SERVER
    """

    # =========================================================================
    # Status Icons
    # =========================================================================
    SUCCESS: str = "✅"      # Green checkmark - operation succeeded
    ERROR: str = "❌"        # Red X - operation failed
    WARNING: str = "⚠️"      # Warning triangle
    INFO: str = "ℹ️"         # Information
    DEBUG: str = "🔍"       # Magnifier - diagnostic detail
    CRITICAL: str = "💥"    # Collision - unrecoverable
    SKIP: str = "⏭️"         # Skip forward - skipped

    # =========================================================================
    # Content Type Icons
    # =========================================================================
    TRACK: str = "📚"       # Track/books
    UNIT: str = "📖"        # Unit/single book
    LESSON: str = "📄"      # Lesson page
    HIDDEN: str = "🙈"      # Hidden lesson
    LAB: str = "🧪"         # Lesson with a lab

    # =========================================================================
    # Misc Icons
    # =========================================================================
    LINK: str = "🔗"        # External link
    SERVER: str = "🌐"      # Web server


# Global singleton instance
icons = Icons()

# Also export individual icons for convenience
SUCCESS = icons.SUCCESS
ERROR = icons.ERROR
WARNING = icons.WARNING
INFO = icons.INFO
DEBUG = icons.DEBUG
CRITICAL = icons.CRITICAL
SKIP = icons.SKIP
TRACK = icons.TRACK
UNIT = icons.UNIT
LESSON = icons.LESSON
HIDDEN = icons.HIDDEN
LAB = icons.LAB
LINK = icons.LINK
SERVER = icons.SERVER


# =========================================================================
# Helper Functions
# =========================================================================

def status_icon(success: bool) -> str:
    """Return SUCCESS or ERROR icon based on boolean."""
    return SUCCESS if success else ERROR


def lesson_icon(hidden: bool) -> str:
    """Return icon for a lesson's visibility."""
    return HIDDEN if hidden else LESSON
