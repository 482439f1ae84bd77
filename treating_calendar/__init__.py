"""Treating calendar: weekly host rotation service."""
