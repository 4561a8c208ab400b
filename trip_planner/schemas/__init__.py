"""Pydantic schemas: response envelopes, read models and request field tables."""
