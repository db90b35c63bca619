"""ACMM assessment building blocks: config, fixes, plugins, schemas, help and CLI."""

__version__ = "0.1.0"