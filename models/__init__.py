"""
models/ - Domain Records
========================
Plain dataclasses returned by the repositories. Each knows how to build
itself from a result row mapping (column name -> value).
"""
