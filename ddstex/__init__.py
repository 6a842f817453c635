"""Read DDS texture files, check their headers and lay out their subresources."""

__version__ = "0.1.0"
__all__ = ["formats", "surface", "header", "pixelformat", "texture"]