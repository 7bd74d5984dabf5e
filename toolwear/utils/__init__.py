"""Boundary helpers."""
