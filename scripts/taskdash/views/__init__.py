"""Textual screens for the dashboard."""
