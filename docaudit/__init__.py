"""Documentation-quality auditing for TypeScript APIs."""

__version__ = "0.1.0"
