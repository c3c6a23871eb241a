"""docrender — pluggable output stage for documentation pipelines."""

__version__ = "0.1.0"
