"""
rowedit - a terminal line editor with incremental syntax highlighting and search.
"""

__version__ = "0.1.0"
