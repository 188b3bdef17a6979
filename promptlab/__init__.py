"""
promptlab - vector similarity and adaptive prompt construction demo.
"""

__version__ = "1.0.0"
