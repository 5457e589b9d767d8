"""
Utility helpers: logging, validation, progress display
"""
