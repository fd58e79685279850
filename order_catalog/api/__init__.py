"""
HTTP layer: routers, dependencies and response schemas.
"""
