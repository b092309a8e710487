"""
Utility package for configuration, logging, file access and search.
"""
