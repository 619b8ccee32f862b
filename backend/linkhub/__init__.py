"""Artist Link Hub: link-in-bio site backend with a flat-file record store."""

__version__ = "0.1.0"
