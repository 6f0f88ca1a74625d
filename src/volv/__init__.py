"""volv — file size history for every commit of a git repository."""

__version__ = "0.1.0"
