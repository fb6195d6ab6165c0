"""Todo Summary Assistant - to-do backend, client and chat summaries."""

__version__ = "0.1.0"
