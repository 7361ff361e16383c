"""
UI helpers for the recipe finder Streamlit app.
"""

from ui.feedback import show_empty_state, show_error, working_spinner

__all__ = [
    "show_empty_state",
    "show_error",
    "working_spinner",
]
