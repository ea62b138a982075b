"""CyberLens: filtering, aggregation and geo reconciliation for country cybersecurity metrics."""

__version__ = "0.3.0"
