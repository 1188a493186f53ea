"""
Procedural city layout generator.
"""

__version__ = "0.1.0"
