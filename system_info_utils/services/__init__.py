"""Readers that decode documents stored as archive chunks."""
