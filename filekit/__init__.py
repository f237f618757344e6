"""File helpers: reading, writing, compression, encryption, line scanning, watching and downloading."""

__version__ = "0.1.0"
__all__ = ["codec", "downloader", "fileio", "lines", "watch", "web"]