"""Chunk file abstraction over archive containers."""
