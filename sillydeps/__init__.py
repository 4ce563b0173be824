"""
sillydeps: find trivial npm dependencies worth inlining.
"""

__version__ = "0.1.0"
