"""Bootstrap helpers for wiring bot infrastructure components."""

from .store_factory import build_backend, build_store
from .container import BotDependencies, DependencyContainer

__all__ = [
    'build_backend',
    'build_store',
    'BotDependencies',
    'DependencyContainer',
]
