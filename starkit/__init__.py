"""Logger, timer queue, socket helpers, and a select-based server with a client."""

__version__ = "0.1.0"
__all__ = ["__version__"]