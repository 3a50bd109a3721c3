"""core — Coordinates and configuration shared by every field."""

__all__ = ["point", "tuning"]
