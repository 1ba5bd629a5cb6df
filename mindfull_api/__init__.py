"""
Top‑level package for the Mindfull API.

This file makes ``mindfull_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``mindfull_api.app.main``.  The HTTP client for the API lives in
``mindfull_api.client``.
"""

__all__ = []
