"""Outbound services used by the API (booking mail)."""
