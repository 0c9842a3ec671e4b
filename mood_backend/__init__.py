"""Supportive-reply backend for a mood journaling app."""
