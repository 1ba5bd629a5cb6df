"""
API package.

``router`` aggregates the per-resource routers from ``endpoints`` and
is mounted under ``/api`` by the application factory.
"""
