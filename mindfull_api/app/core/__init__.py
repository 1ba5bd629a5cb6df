"""Configuration, storage, logging and security helpers."""
