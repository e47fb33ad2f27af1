"""
Generic utility functions shared across modules.

Includes mathematical helpers, random-source construction, and logging setup.
"""
