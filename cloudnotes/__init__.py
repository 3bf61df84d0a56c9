"""
CloudNotes.

- backend/: REST API, note query engine, authentication, configuration
"""

__version__ = "1.0.0"
