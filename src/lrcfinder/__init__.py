"""lrcfinder - synced lyrics search for NetEase Cloud Music."""

__version__ = "0.3.0"
