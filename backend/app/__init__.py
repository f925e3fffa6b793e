"""Workly backend API package."""
