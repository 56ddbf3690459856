"""
flowy - rotate the desktop wallpaper through the day, following the sun.
"""

__version__ = "0.5.0"
