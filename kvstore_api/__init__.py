"""HTTP key-value store API (WSGI) backed by a Tarantool space."""

__version__ = "0.1.0"