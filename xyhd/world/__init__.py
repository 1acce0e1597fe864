from .grid import WorldGrid

__all__ = ["WorldGrid"]
