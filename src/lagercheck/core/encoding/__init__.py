"""Wire encodings for log records."""
