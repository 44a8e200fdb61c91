"""
Object definition discovery, parsing and default-value synthesis.

This module turns lwm2m-object-<id>.xml documents into ObjectDefinition models.
"""

__all__ = ["models", "scanner", "parser", "synthesizer"]
