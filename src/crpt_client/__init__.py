"""crpt-client: rate-limited submission of documents to the CRPT registry."""

__version__ = "0.1.0"
