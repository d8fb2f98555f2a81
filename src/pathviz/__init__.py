"""pathviz: navigation-geometry rasterization and route planning helpers."""

__version__ = "0.1.0"
