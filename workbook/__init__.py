"""Small worked programs: expressions, HTML tools, data structures, concurrency and toy servers."""

__version__ = "0.1.0"