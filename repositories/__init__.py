"""
repositories/ - Data Access Layer
==================================
Each repository owns the statements for one domain entity, runs them
through the executor it was constructed with, and returns domain model
objects. Executor errors propagate unchanged.
"""
