"""
Field tables and pydantic read models for API payloads.

Each resource declares its columns once as a tuple of
``ResourceField`` entries.  The same table drives request validation,
field extraction and output serialization so the three cannot drift.
"""
