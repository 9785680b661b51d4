"""
Helpers for digests, descriptor consistency and runtime settings.
"""
