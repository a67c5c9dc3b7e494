"""linkcopy - turns double-copied URLs into titled rich-text links."""

__version__ = "0.1.0"
