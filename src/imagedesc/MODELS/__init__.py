"""
Data models for image descriptors, archive indexes and repository views.
"""
