# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use .env (local, gitignored); see .env.example.
"""

ENV_VARS = {
    # App / logging
    "WORKAST_APP_NAME": "App display name (default: workast).",
    "WORKAST_LOG_LEVEL": "Console logging level (default: INFO). Logs go to stderr.",
    "WORKAST_LOG_TO_FILE": "Also write full DEBUG logs to <data_dir>/workast-mcp.log (true/false).",
    "WORKAST_DATA_DIR": "Local data directory for log files (default: .local/workast).",
    # Workast API
    "WORKAST_API_TOKEN": "Workast API token (required for every tool call).",
    "WORKAST_BASE_URL": "Workast API base URL (default: https://api.todobot.io).",
    "WORKAST_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "WORKAST_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 30).",
    # Task search
    "WORKAST_MAX_CONCURRENCY": "Max upstream calls in flight during list_tasks (default: 4; 1 = sequential).",
    "WORKAST_DEFAULT_LIMIT": "Result cap for list_tasks when the caller gives none (default: 25).",
    # Tool server
    "WORKAST_MCP_TRANSPORT": "MCP transport: stdio | sse | streamable-http (default: stdio).",
}
