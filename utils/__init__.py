"""Utility helpers for the lead-capture wizard."""
