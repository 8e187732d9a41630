"""
Decision table service: classifies a boolean triple under a rule set and
computes the matching value formula over HTTP.
"""

__version__ = "0.1.0"
