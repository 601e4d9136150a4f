"""stitchcount - voice control for knitting and crochet counters."""

__version__ = "0.1.0"
