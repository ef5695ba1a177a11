"""P2000 paging log parser and terminal viewer."""

__version__ = "0.1.0"
