"""
Application package initializer.

The API is organised into small pieces: ``core`` holds configuration,
storage, logging and the authorization gate; ``schemas`` declares the
field tables and read models for each resource; ``services`` issues
the queries; and ``api/endpoints`` maps HTTP requests onto the
services.  Each resource (users, entries) is one vertical slice
through these packages.
"""

from .main import app  # noqa: F401
