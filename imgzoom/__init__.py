"""
imgzoom - resize embedded markdown images from the wheel or the keyboard
"""

__version__ = "0.3.0"
