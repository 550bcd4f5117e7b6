"""
Data access layer.

Design rules:
- Views call ONLY functions in data.service.
- All backend calls are wrapped so a failure falls back to mock data (or stops with an error).
- No env var reads here (config-only).
"""
