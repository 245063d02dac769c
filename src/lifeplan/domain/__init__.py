"""Domain layer: entity rules, calendar arithmetic, and user copy.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, or config.
"""
