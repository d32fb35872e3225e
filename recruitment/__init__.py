"""Recruitment application backend."""
