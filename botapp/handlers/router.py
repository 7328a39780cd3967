"""Declarative callback routing utilities."""

from __future__ import annotations
from tracking import t
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from telegram import Update
from telegram.ext import ContextTypes

CallbackHandlerFn = Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[object]]


@dataclass
class PrefixRoute:
    """Route for callback data of the form ``<prefix><payload>``."""

    prefix: str
    handler: CallbackHandlerFn


def callback_payload(update: Update, prefix: str) -> Optional[str]:
    """Return the part of the callback data after ``prefix``.

    ``None`` when the update carries no callback data, the data does not
    start with ``prefix``, or the payload is empty.
    """

    t('botapp.handlers.router.callback_payload')
    query = update.callback_query
    data = query.data if query else None
    if not data or not data.startswith(prefix):
        return None
    payload = data[len(prefix):]
    return payload or None


class CallbackRouter:
    """Routes callback query data to async handlers.

    Exact tokens win over prefixes; prefixes are tried in registration
    order, so register the longer of two overlapping prefixes first.
    """

    def __init__(self, default_handler: CallbackHandlerFn) -> None:
        t('botapp.handlers.router.CallbackRouter.__init__')
        self._default_handler = default_handler
        self._exact_routes: Dict[str, CallbackHandlerFn] = {}
        self._prefix_routes: List[PrefixRoute] = []

    def add_exact(self, token: str, handler: CallbackHandlerFn) -> None:
        t('botapp.handlers.router.CallbackRouter.add_exact')
        self._exact_routes[token] = handler

    def add_prefix(self, prefix: str, handler: CallbackHandlerFn) -> None:
        t('botapp.handlers.router.CallbackRouter.add_prefix')
        self._prefix_routes.append(PrefixRoute(prefix=prefix, handler=handler))

    def resolve(self, data: Optional[str]) -> CallbackHandlerFn:
        t('botapp.handlers.router.CallbackRouter.resolve')
        if not data:
            return self._default_handler

        handler = self._exact_routes.get(data)
        if handler:
            return handler

        for route in self._prefix_routes:
            if data.startswith(route.prefix):
                return route.handler

        return self._default_handler

    async def dispatch(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        t('botapp.handlers.router.CallbackRouter.dispatch')
        query = update.callback_query
        handler = self.resolve(query.data if query else None)
        await handler(update, context)


__all__ = [
    "CallbackRouter",
    "PrefixRoute",
    "callback_payload",
]
