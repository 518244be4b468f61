"""Pydantic records and lenient JSON tree accessors."""
