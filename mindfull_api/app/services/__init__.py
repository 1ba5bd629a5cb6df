"""
Service layer.

Each service issues single statements against one table through the
connection it is handed.  Services return plain ``sqlite3.Row``
records or affected-row counts and leave HTTP concerns to the
endpoints.  Writes are committed before the service method returns.
"""
