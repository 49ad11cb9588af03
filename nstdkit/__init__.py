"""General-purpose building blocks: hashing, containers, strings, threading, callbacks, directories and console input."""

__version__ = "0.1.0"