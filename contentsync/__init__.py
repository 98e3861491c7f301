"""Persistence adapter for editable table and image-list content.

The ``services`` package holds the table and image services, the
``core`` package the configuration, validation, and error plumbing they
share, and ``app`` a thin FastAPI layer over both.
"""
