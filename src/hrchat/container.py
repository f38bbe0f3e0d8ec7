"""Dependency injection container for the chat workflow."""

from __future__ import annotations

from dependency_injector import containers, providers

from .backend import HTTPBackendClient
from .core import ConversationController
from .messaging import ConsoleTransport, EmailJSTransport
from .schemas.config import load_config


class ChatContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    backend_client = providers.Singleton(
        HTTPBackendClient,
        base_url=config.backend.base_url,
        timeout=config.backend.timeout,
    )

    transport = providers.Selector(
        config.messaging.transport,
        console=providers.Singleton(ConsoleTransport),
        emailjs=providers.Singleton(
            EmailJSTransport,
            service_id=config.messaging.service_id,
            template_id=config.messaging.template_id,
            public_key=config.messaging.public_key,
            private_key=config.messaging.private_key,
            endpoint=config.messaging.endpoint,
            timeout=config.messaging.timeout,
        ),
    )

    controller = providers.Factory(
        ConversationController,
        jd_parser=backend_client,
        scorer=backend_client,
        answerer=backend_client,
        transport=transport,
        weights=config.weights,
        parallel_sends=config.messaging.parallel,
    )


def create_container(*, settings: dict | None = None) -> ChatContainer:
    """Instantiate container from validated settings; defaults fill the gaps."""

    app_config = load_config(settings or {})
    container = ChatContainer()
    container.config.from_dict(app_config.to_settings())
    return container
