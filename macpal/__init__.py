"""
MacPal - Step-by-step Mac lessons for first-time computer users.

Subpackages:
- schemas: Pydantic models for lessons, steps and progress
- classroom: lesson catalog, progress store and navigator
- viewer: HTML helpers for the Streamlit app
"""

__version__ = "0.1.0"
