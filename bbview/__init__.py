"""BBView - terminal dashboard for Bitbucket Cloud repositories."""

__version__ = "0.1.0"
