"""
workast_mcp: Workast task management exposed as MCP tools.

Packages:
- api: async HTTP client for the Workast REST API
- tasks: task models and the "list tasks" search pipeline
- connectors: MCP server wiring (one tool per operation)
- cli: composition root and entrypoint
"""

__version__ = "1.0.0"
