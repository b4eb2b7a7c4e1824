"""Allow ``python -m synaptik_mcp``."""

from synaptik_mcp.server import run

run()
