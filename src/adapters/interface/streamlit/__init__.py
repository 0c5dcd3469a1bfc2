"""Streamlit interface adapter."""

__all__ = []
