"""Link Hub: a link directory service with pluggable storage backends."""

__version__ = "0.1.0"
