"""Domain layer — entry classification, composition plans, discovery.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
