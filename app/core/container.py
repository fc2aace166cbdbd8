"""Dependency Injection Container.

This module provides a centralized DI container using dependency-injector.
Lifecycles:
- Singleton: One instance for the entire application (Config)
- Transient: New instance every time (Factory), used for everything that
  touches a request so that no client or transport is shared

Usage:
    # In FastAPI
    from app.core.container import get_upload_service

    @app.post("/upload")
    async def upload(service: UploadService = Depends(get_upload_service)):
        ...

    # In tests
    with override_upload_client(stub_client):
        ...
"""

from dependency_injector import containers, providers

from app.core.config import Config, get_config


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies (external API clients)."""

    global_config = providers.Dependency(instance_of=Config)

    # ============================================
    # YouTube
    # ============================================

    youtube_upload_client = providers.Factory(
        "app.infrastructure.youtube_api.YouTubeUploadClient",
        chunk_size=global_config.provided.upload_chunk_size,
        timeout=global_config.provided.upload_timeout,
        mimetype=global_config.provided.upload_mimetype,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Service layer dependencies.

    Services are Transient (Factory) and receive infrastructure
    dependencies via injection.
    """

    infrastructure = providers.DependenciesContainer()

    upload_service = providers.Factory(
        "app.services.uploader.youtube_uploader.UploadService",
        upload_client=infrastructure.youtube_upload_client,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root application container.

    Composes all sub-containers and provides the main entry point.
    """

    # Uses get_config() to ensure same instance across the app
    config = providers.Singleton(get_config)

    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
    )

    services = providers.Container(
        ServiceContainer,
        infrastructure=infrastructure,
    )

    upload_service = providers.Factory(
        lambda svc: svc,
        svc=services.upload_service,
    )


def create_container() -> ApplicationContainer:
    """Create and configure the application container.

    Returns:
        Configured ApplicationContainer instance
    """
    return ApplicationContainer()


# Global container instance
container = create_container()


# ============================================
# FastAPI Integration
# ============================================


def get_container() -> ApplicationContainer:
    """Get the global container (for FastAPI Depends)."""
    return container


def get_upload_service():
    """FastAPI dependency for a request-scoped UploadService."""
    return container.upload_service()


# ============================================
# Testing Utilities
# ============================================


def override_upload_client(mock_client):
    """Context manager to override the YouTube upload client for testing.

    Usage:
        with override_upload_client(stub):
            # UploadService instances will receive stub
            ...
    """
    return container.infrastructure.youtube_upload_client.override(mock_client)


__all__ = [
    "ApplicationContainer",
    "InfrastructureContainer",
    "ServiceContainer",
    "container",
    "create_container",
    "get_config",
    "get_container",
    "get_upload_service",
    "override_upload_client",
]
