"""
Parsers turning raw bytes into descriptor and archive index models.
"""
