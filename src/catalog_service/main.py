"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn catalog_service.main:app --reload
"""

from catalog_service.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from catalog_service.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "catalog_service.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
