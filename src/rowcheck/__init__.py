"""
rowcheck: declarative validation for imported contact rows.

This package provides the record models, the field-rule validation engine,
an in-memory store that only persists valid entities, and a batch importer
that turns invalid rows into record errors.
"""
