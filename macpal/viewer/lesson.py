"""
Lesson renderer - HTML fragments for the Streamlit app.

Turns NavigatorSnapshot values into small HTML pieces:
- Lesson header ("Step N of M")
- Instruction text
- Home screen lesson rows and progress summary
- Completion message
"""

import html
from pathlib import Path
from typing import Optional

from macpal.classroom import LessonRow, NavigatorSnapshot


HELP_IMAGE_EXTENSIONS = (".gif", ".png", ".jpg", ".jpeg")


def get_lesson_css() -> str:
    """Get CSS styles for lesson display."""
    return """
    <style>
    .lesson-header {
        text-align: center;
        margin: 1em 0;
    }
    .lesson-title {
        font-size: 1.8em;
        font-weight: 600;
    }
    .lesson-step-count {
        color: #666;
        font-size: 0.95em;
        margin-top: 0.3em;
    }
    .lesson-instruction {
        font-size: 1.25em;
        line-height: 1.7em;
        margin: 1.5em 0;
    }
    .lesson-row {
        display: flex;
        align-items: center;
        gap: 0.8em;
        padding: 0.8em 1em;
        background: rgba(128, 128, 128, 0.05);
        border-radius: 10px;
        margin: 0.4em 0;
    }
    .lesson-row-mark {
        font-size: 1.3em;
        color: #999;
    }
    .lesson-row-mark.completed {
        color: #388E3C;
    }
    .lesson-row-title {
        font-weight: 500;
    }
    .lesson-row-description {
        color: #666;
        font-size: 0.85em;
    }
    .progress-summary {
        color: #666;
        font-size: 0.85em;
        text-align: right;
    }
    .completion-message {
        background: #e8f5e9;
        border-radius: 12px;
        padding: 1.5em;
        text-align: center;
        font-size: 1.2em;
    }
    </style>
    """


def render_step_header(snapshot: NavigatorSnapshot) -> str:
    """Render lesson title with the 1-based step position."""
    title = html.escape(snapshot.lesson_title or "")
    return (
        f'<div class="lesson-header">'
        f'<div class="lesson-title">{title}</div>'
        f'<div class="lesson-step-count">Step {snapshot.step_index + 1} of {snapshot.total_steps}</div>'
        f'</div>'
    )


def render_instruction(snapshot: NavigatorSnapshot) -> str:
    content = html.escape(snapshot.step_text or "").replace('\n', '<br>')
    return f'<div class="lesson-instruction">{content}</div>'


def next_button_label(snapshot: NavigatorSnapshot) -> str:
    return "Finish" if snapshot.is_last_step else "I did it"


def render_lesson_row(row: LessonRow) -> str:
    """Render one lesson in the home screen list."""
    mark_class = "lesson-row-mark completed" if row.completed else "lesson-row-mark"
    mark = "✓" if row.completed else "○"
    return (
        f'<div class="lesson-row">'
        f'<span class="{mark_class}">{mark}</span>'
        f'<div><div class="lesson-row-title">{html.escape(row.title)}</div>'
        f'<div class="lesson-row-description">{html.escape(row.description)}</div></div>'
        f'</div>'
    )


def render_progress_summary(snapshot: NavigatorSnapshot) -> str:
    return f'<div class="progress-summary">{snapshot.completed_count}/{snapshot.total_lessons} completed</div>'


def render_completion_message(snapshot: NavigatorSnapshot) -> str:
    """Render the completion overlay text."""
    title = html.escape(snapshot.lesson_title or "this lesson")
    if snapshot.in_onboarding:
        follow_up = "Let's keep going with the next lesson."
    else:
        follow_up = "You can pick another lesson from the home screen."
    return (
        f'<div class="completion-message">'
        f'<strong>Well done!</strong> You finished {title}.<br>{follow_up}'
        f'</div>'
    )


def resolve_help_image_path(name: Optional[str], assets_dir: Path) -> Optional[Path]:
    """
    Find the file for a help image reference.

    Returns the first existing <name><ext> under assets_dir, or None.
    """
    if not name:
        return None
    for ext in HELP_IMAGE_EXTENSIONS:
        candidate = Path(assets_dir) / f"{name}{ext}"
        if candidate.is_file():
            return candidate
    return None
