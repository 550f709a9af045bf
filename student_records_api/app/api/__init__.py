"""
HTTP layer.

``router`` aggregates the resource routers mounted under ``/api`` and
``errors`` turns service exceptions into JSON error responses.
"""
