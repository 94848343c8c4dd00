"""Wait for a Vercel deployment of a given commit to become ready."""

__version__ = "0.1.0"
