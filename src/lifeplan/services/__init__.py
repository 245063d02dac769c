"""Service layer: cross-entity invariants run inside a caller's transaction.

Services may import from domain and config layers, and talk to storage
only through :class:`lifeplan.services.ports.StoragePort`.
They must never import from infrastructure.
"""
