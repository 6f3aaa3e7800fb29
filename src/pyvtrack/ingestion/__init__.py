"""Ingestion layer.

Adapters that fetch rows from the tracking backend and turn them into
validated models.
"""

__all__: list[str] = []
