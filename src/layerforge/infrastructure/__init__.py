"""Infrastructure layer — SQLite persistence and the trait store.

This layer depends on stdlib and third-party libs (SQLAlchemy, NetworkX)
plus the domain models it persists. It must never import from services,
commands, or output.
"""
