"""
Configuration loading and validation for analytics and logging settings.

Provides strongly typed settings objects loaded from environment variables
(and an optional .env file) with upfront validation.
"""
