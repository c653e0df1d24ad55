"""
ThemeScore Colors Module

Provides sRGB/linear conversion, alpha-weighted image sampling and
similarity scoring of an image's average color against a theme color.
"""

__version__ = "1.0.0"
