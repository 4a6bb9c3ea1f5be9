"""dirshare — browse and download a local directory tree over HTTP."""

__version__ = "0.3.0"
