"""
ThemeScore

Scores how closely an image's average color matches a theme color.
"""

__version__ = "1.0.0"
