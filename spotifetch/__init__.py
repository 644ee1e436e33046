"""Resolve Spotify track links into download links from the terminal."""

__version__ = "1.0.0"
