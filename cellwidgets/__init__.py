"""Layout containers and widgets that draw onto an in-memory character-cell screen."""

__version__ = "0.1.0"