"""
Workast REST API access.

Components:
- client.py: WorkastClient (httpx, bearer auth, JSON in/out)
- errors.py: exception hierarchy (config / API status / transport)
"""
