"""Table blueprints and a schema builder that drives registered database grammars."""

__version__ = "0.1.0"
__all__ = ["blueprint", "builder", "mode", "table", "types"]