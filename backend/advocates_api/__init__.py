"""Advocate directory search service."""
