"""Session correlation and HTTP probing for the ParaBank end-to-end suite."""

__version__ = "0.1.0"
