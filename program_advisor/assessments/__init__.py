"""
Assessment persistence.

Responsibilities:
- Define the storage interface the HTTP layer depends on.
- Provide the in-memory implementation used by default and in tests.
"""
