"""
Git Batch Merge - pull and merge several branches into one target branch.

Branches are picked from a tree-shaped menu and the last choices are
remembered as defaults for the next run.
"""

__version__ = "0.1.0"
