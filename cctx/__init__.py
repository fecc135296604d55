"""Switch Claude Code between saved settings contexts, from the command line or from Python."""

__version__ = "0.1.4"