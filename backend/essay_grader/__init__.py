"""Essay test catalogue and heuristic scoring service."""

__version__ = "0.1.0"
