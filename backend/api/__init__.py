"""
HTTP API routers, mounted under /api by main.py.
"""
