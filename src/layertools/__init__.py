"""
layertools - extract layered Spring Boot jars

Reads the layer index a layered jar declares in its manifest, lists its
layers and classpath, and extracts layers into per-layer directories for
container image builds.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
