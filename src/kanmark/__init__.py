"""Markdown task boards stored in git."""
