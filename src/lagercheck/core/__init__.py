"""Core domain: records, encoding, the logger and its ports."""
