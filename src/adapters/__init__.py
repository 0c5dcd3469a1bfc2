"""Adapters wiring the dashboard to its user interfaces."""
