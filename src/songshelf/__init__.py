"""SongShelf - faceted browsing over a static song catalog."""

__version__ = "0.1.0"
