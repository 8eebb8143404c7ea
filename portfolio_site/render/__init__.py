"""Renderers: pure functions from projects to element trees."""
