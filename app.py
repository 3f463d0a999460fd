"""
MacPal - Your friendly Mac guide

Streamlit application that walks first-time computer users through
step-by-step lessons and remembers which ones they have finished.

Usage:
    streamlit run app.py
"""

import logging
from pathlib import Path

import streamlit as st

from macpal.classroom import (
    DEFAULT_CATALOG,
    Navigator,
    NavigatorSnapshot,
    ProgressStore,
    Screen,
)
from macpal.config import Settings, configure_logging
from macpal.schemas import DeviceType
from macpal.viewer import (
    get_lesson_css,
    next_button_label,
    render_completion_message,
    render_instruction,
    render_lesson_row,
    render_progress_summary,
    render_step_header,
    resolve_help_image_path,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="MacPal",
    page_icon="🖥️",
    layout="centered",
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

@st.cache_resource
def get_progress_store(db_path: str) -> ProgressStore:
    """One store per database file, shared by every browser session."""
    return ProgressStore(Path(db_path))


def init_session_state():
    """Initialize session state variables."""
    if "settings" not in st.session_state:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        st.session_state.settings = settings

    if "progress" not in st.session_state:
        st.session_state.progress = get_progress_store(str(st.session_state.settings.progress_db))

    if "navigator" not in st.session_state:
        st.session_state.navigator = Navigator(
            DEFAULT_CATALOG,
            st.session_state.progress,
            on_complete=lambda lesson: logger.info(f"Completion acknowledged: {lesson.title}"),
        )


def dispatch(action, *args):
    """Run one navigator action and redraw."""
    action(*args)
    st.rerun()


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    st.sidebar.title("🖥️ MacPal")

    snapshot = st.session_state.navigator.snapshot()
    stats = st.session_state.progress.get_completion_stats(snapshot.total_lessons)
    st.sidebar.markdown(
        f"**Progress:** {stats['completed']}/{stats['total_lessons']} lessons ({stats['completion_percent']}%)"
    )
    st.sidebar.progress(min(stats['completion_percent'] / 100, 1.0))

    st.sidebar.divider()
    if st.sidebar.button("Reset progress", use_container_width=True):
        dispatch(st.session_state.navigator.reset_progress)


# -----------------------------------------------------------------------------
# Home
# -----------------------------------------------------------------------------

def render_home(snapshot: NavigatorSnapshot):
    nav = st.session_state.navigator

    st.title("MacPal")
    st.caption("Your friendly Mac guide")
    st.divider()

    if snapshot.onboarding_next_lesson_id:
        st.subheader("Continue where you left off")
        st.markdown(
            f"**Continue: {snapshot.onboarding_next_lesson_title}**  \n"
            f"Lesson {snapshot.onboarding_position} of {snapshot.total_lessons}"
        )
        if st.button("Continue ▶", type="primary", use_container_width=True):
            dispatch(nav.continue_onboarding)
    else:
        st.subheader("New to Mac?")
        st.markdown("**Start Full Onboarding**  \nLearn the basics step by step")
        if st.button("Start ▶", type="primary", use_container_width=True):
            dispatch(nav.start_onboarding)

    st.divider()

    col1, col2 = st.columns([3, 1])
    with col1:
        st.subheader("All Lessons")
    with col2:
        st.markdown(render_progress_summary(snapshot), unsafe_allow_html=True)

    for row in snapshot.lessons:
        col1, col2 = st.columns([5, 1])
        with col1:
            st.markdown(render_lesson_row(row), unsafe_allow_html=True)
        with col2:
            if st.button("Open", key=f"lesson_{row.id}", use_container_width=True):
                dispatch(nav.select_lesson, row.id)


# -----------------------------------------------------------------------------
# Device Selection
# -----------------------------------------------------------------------------

def render_device_selection(snapshot: NavigatorSnapshot):
    nav = st.session_state.navigator

    st.title(snapshot.lesson_title)
    st.markdown("Which one are you using?")

    columns = st.columns(len(DeviceType))
    for column, device in zip(columns, DeviceType):
        with column:
            if st.button(device.label, key=f"device_{device.value}", use_container_width=True):
                dispatch(nav.select_device, device)

    st.divider()
    if st.button("Exit lesson"):
        dispatch(nav.exit)


# -----------------------------------------------------------------------------
# Lesson
# -----------------------------------------------------------------------------

def render_lesson(snapshot: NavigatorSnapshot):
    nav = st.session_state.navigator
    settings = st.session_state.settings

    st.markdown(get_lesson_css(), unsafe_allow_html=True)
    st.markdown(render_step_header(snapshot), unsafe_allow_html=True)
    st.divider()
    st.markdown(render_instruction(snapshot), unsafe_allow_html=True)

    if snapshot.completion_visible:
        st.markdown(render_completion_message(snapshot), unsafe_allow_html=True)
        if st.button("Continue", type="primary", use_container_width=True):
            dispatch(nav.acknowledge_completion)
        return

    if snapshot.help_visible:
        with st.container(border=True):
            image_path = resolve_help_image_path(snapshot.help_image, settings.assets_dir)
            if image_path:
                st.image(str(image_path))
            else:
                st.info(f"Picture not available: {snapshot.help_image}")
            if st.button("Close help"):
                dispatch(nav.toggle_help)

    st.divider()

    col_back, col_stuck, col_next = st.columns(3)
    with col_back:
        if snapshot.can_go_back and st.button("Back", use_container_width=True):
            dispatch(nav.back)
    with col_stuck:
        if st.button(
            "I'm stuck",
            disabled=not snapshot.help_available,
            use_container_width=True,
            help="Show a picture of this step",
        ):
            dispatch(nav.toggle_help)
    with col_next:
        if st.button(next_button_label(snapshot), type="primary", use_container_width=True):
            dispatch(nav.next)

    if st.button("Exit lesson"):
        dispatch(nav.exit)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    snapshot = st.session_state.navigator.snapshot()
    if snapshot.screen == Screen.HOME:
        render_home(snapshot)
    elif snapshot.screen == Screen.DEVICE_SELECTION:
        render_device_selection(snapshot)
    else:
        render_lesson(snapshot)


if __name__ == "__main__":
    main()
