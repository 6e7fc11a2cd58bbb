"""Core models, identifiers and errors for Provider Management Service."""
