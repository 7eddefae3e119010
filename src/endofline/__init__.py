"""End of Line - territory-control card game core."""

__version__ = "0.1.0"
