"""
Observability module for Recipe Finder.

Structured logging only: JSON in production, colored text elsewhere.
"""
