"""
MacPal Viewer - Rendering helpers for lesson display.

This module provides:
- Lesson header and instruction rendering
- Home screen rows and progress summary
- Help image lookup in the assets directory
"""

from .lesson import (
    get_lesson_css,
    render_step_header,
    render_instruction,
    next_button_label,
    render_lesson_row,
    render_progress_summary,
    render_completion_message,
    resolve_help_image_path,
    HELP_IMAGE_EXTENSIONS,
)

__all__ = [
    "get_lesson_css",
    "render_step_header",
    "render_instruction",
    "next_button_label",
    "render_lesson_row",
    "render_progress_summary",
    "render_completion_message",
    "resolve_help_image_path",
    "HELP_IMAGE_EXTENSIONS",
]
