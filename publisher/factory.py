"""Publisher factory: give any object its own private subscribe/publish pair."""

from typing import Any, Optional, TypeVar

from publisher.observability import get_logger
from publisher.registry import ChannelRegistry

T = TypeVar("T")

_logger = get_logger("publisher.factory")


class Publisher:
    """Empty object handed out by create_publisher() when no target is given."""

    def __repr__(self) -> str:
        channels = len(self.registry.channels()) if hasattr(self, "registry") else 0
        return f"{self.__class__.__name__}(channels={channels})"


def create_publisher(target: Optional[T] = None, *, isolate_errors: Optional[bool] = None) -> T:
    """
    Attach `subscribe`, `publish` and `registry` to `target` (or a new Publisher)
    and return it. Each call creates a new ChannelRegistry owned by the target.

    Calling it again on an object that already publishes replaces the registry:
    earlier subscriptions are no longer reached by publish, although their
    handles still attach and detach against the old channel lists.
    """
    if target is None:
        target = Publisher()
    if hasattr(target, "registry") and isinstance(target.registry, ChannelRegistry):
        _logger.warning("registry_replaced", extra={"target": type(target).__name__})
    registry = ChannelRegistry(owner=target, isolate_errors=isolate_errors)
    target.subscribe = registry.subscribe
    target.publish = registry.publish
    target.registry = registry
    return target


# The factory is itself the process-wide default publisher.
create_publisher(create_publisher)
