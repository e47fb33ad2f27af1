"""
Data model and schema enforcement for opportunities and yield curves.

Defines immutable records for trade opportunities and curve points, with
strict validation of field ranges at construction time.
"""
