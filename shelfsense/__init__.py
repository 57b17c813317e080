"""
ShelfSense: embedding-based grocery item classification and auto-complete.
"""

__version__ = "1.0.0"
