"""Application lifecycle events."""

from catalog_service.core.events.lifespan import build_catalog_client, lifespan


__all__ = ["build_catalog_client", "lifespan"]
