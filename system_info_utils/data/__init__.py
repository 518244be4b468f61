"""
Document readers for the system info and driver overrides JSON formats.

This package is responsible for:
* The key names and chunk identifiers of the wire format.
* Mapping versioned system info documents onto ``SystemInfo`` records.
* Filtering driver overrides documents down to user modified settings.
"""
