"""diskscope - browse a directory tree by size and clean it up."""

__version__ = "0.1.0"
