"""Download blocklists and IP lists and compile them into sing-box rule sets."""

__version__ = "0.1.0"