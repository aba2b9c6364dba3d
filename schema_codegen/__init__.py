"""
schema-codegen: generate data-model types from a database schema.

Reads a normalized schema (tables, columns, generic types) and renders
one source file per table for each configured target language.
"""

__version__ = "0.1.0"
