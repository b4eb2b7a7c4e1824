"""Utility modules for Synaptik MCP: dates, tags, parsing, urgency and formatting."""
