"""
Utility modules for the Streamlit frontend.

This package contains:
- session: per-session orchestrator and favorites helpers
"""
