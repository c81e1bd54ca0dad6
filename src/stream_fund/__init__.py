"""Stream Fund creator-yield scoring pipeline."""

__version__ = "0.1.0"
