"""Dependency container wiring bot runtime components together."""

from __future__ import annotations
from tracking import t

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from bookings.store import BookingBackend, BookingStore
from botapp.config import BotAppConfig
from botapp.handlers.callback_handlers import CallbackHandler
from botapp.handlers.state import SessionRegistry
from botapp.i18n import Translator, create_translator

from .store_factory import build_backend, build_store


@dataclass(frozen=True)
class BotDependencies:
    """Concrete dependency snapshot for the Telegram bot runtime."""

    config: BotAppConfig
    translator: Translator
    backend: BookingBackend
    store: BookingStore
    sessions: SessionRegistry
    callback_handler: CallbackHandler

    def as_dict(self) -> Dict[str, Any]:
        """Return dependencies as a mapping keyed by attribute name."""
        t('botapp.bootstrap.container.BotDependencies.as_dict')

        return {
            'config': self.config,
            'translator': self.translator,
            'backend': self.backend,
            'store': self.store,
            'sessions': self.sessions,
            'callback_handler': self.callback_handler,
        }


class DependencyContainer:
    """Lazy dependency container with optional override support.

    ``overrides`` pre-seeds the cache by attribute name, e.g. a
    ``backend`` in tests.
    """

    def __init__(
        self,
        config: BotAppConfig,
        overrides: Optional[Dict[str, Any]] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        t('botapp.bootstrap.container.DependencyContainer.__init__')
        self.config = config
        self.clock = clock
        self._cache: Dict[str, Any] = {}
        if overrides:
            self._cache.update(overrides)

    def _resolve(self, key: str, factory: Callable[[], Any]) -> Any:
        t('botapp.bootstrap.container.DependencyContainer._resolve')
        if key not in self._cache:
            self._cache[key] = factory()
        return self._cache[key]

    @property
    def translator(self) -> Translator:
        t('botapp.bootstrap.container.DependencyContainer.translator')
        return self._resolve('translator', lambda: create_translator(self.config.language))

    @property
    def backend(self) -> BookingBackend:
        t('botapp.bootstrap.container.DependencyContainer.backend')
        return self._resolve('backend', lambda: build_backend(self.config))

    @property
    def store(self) -> BookingStore:
        t('botapp.bootstrap.container.DependencyContainer.store')
        return self._resolve('store', lambda: build_store(self.config, self.backend))

    @property
    def sessions(self) -> SessionRegistry:
        t('botapp.bootstrap.container.DependencyContainer.sessions')

        def factory() -> SessionRegistry:
            t('botapp.bootstrap.container.DependencyContainer.sessions.factory')
            return SessionRegistry(
                self.store,
                self.translator,
                timezone=self.config.timezone,
                notification_seconds=self.config.display.notification_seconds,
                clock=self.clock,
            )

        return self._resolve('sessions', factory)

    @property
    def callback_handler(self) -> CallbackHandler:
        t('botapp.bootstrap.container.DependencyContainer.callback_handler')

        def factory() -> CallbackHandler:
            t('botapp.bootstrap.container.DependencyContainer.callback_handler.factory')
            return CallbackHandler(
                self.store,
                self.sessions,
                self.translator,
                timezone=self.config.timezone,
                clock=self.clock,
            )

        return self._resolve('callback_handler', factory)

    def build_dependencies(self) -> BotDependencies:
        """Materialise and return all core dependencies."""

        t('botapp.bootstrap.container.DependencyContainer.build_dependencies')
        return BotDependencies(
            config=self.config,
            translator=self.translator,
            backend=self.backend,
            store=self.store,
            sessions=self.sessions,
            callback_handler=self.callback_handler,
        )


__all__ = ['BotDependencies', 'DependencyContainer']
