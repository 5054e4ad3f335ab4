"""sunshine - permission auditor for SSH trust material."""

__version__ = "0.1.0"
