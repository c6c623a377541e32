"""
PropScope: property investment research engine.
"""

__version__ = "0.1.0"
