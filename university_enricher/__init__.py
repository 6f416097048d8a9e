"""University data enrichment using structured LLM lookups."""

__version__ = "0.1.0"
