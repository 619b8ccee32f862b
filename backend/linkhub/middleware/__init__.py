"""HTTP middleware: request correlation, request logging, rate limiting."""
