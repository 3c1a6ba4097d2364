"""Binding of a handler to its invocation context, and the receiver accessor."""

from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Callable, Optional

_current_context: ContextVar[Optional[Any]] = ContextVar("publisher_context", default=None)


def current_context() -> Optional[Any]:
    """Return the context of the handler currently being invoked by publish.

    Handlers are called with exactly the published arguments, so this is how a
    handler reaches the object it was bound to (the publisher by default).
    Returns None outside of a delivery.
    """
    return _current_context.get()


@dataclass(eq=False)
class Binding:
    """One registered (handler, context) pair on a channel.

    Compared by identity: two bindings of the same handler and context are
    distinct entries and each one fires.
    """

    handler: Callable[..., Any]
    context: Any

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        token = _current_context.set(self.context)
        try:
            return self.handler(*args, **kwargs)
        finally:
            _current_context.reset(token)

    def __repr__(self) -> str:
        name = getattr(self.handler, "__qualname__", type(self.handler).__name__)
        return f"Binding(handler={name}, context={type(self.context).__name__})"
