"""Support code for a small teaching kernel: bits, ranges, lists, printf, console and on-disk formats."""

__version__ = "0.1.0"