"""Infrastructure layer — template sources and the Jinja2 engine adapter.

This layer depends on stdlib and third-party libs (Jinja2).
It must never import from domain, services, commands, or output.
The service layer bridges between domain plans and infrastructure.
"""
