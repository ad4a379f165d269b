"""A* path finding on flagged tile maps, with path filtering, smoothing and free-spot search."""

__version__ = "0.6.4"

__all__ = ["base", "bresenham", "finder", "normal", "grid", "tilemap", "flagmap", "path", "api"]