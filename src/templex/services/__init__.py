"""Service layer — registry construction and template execution.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
