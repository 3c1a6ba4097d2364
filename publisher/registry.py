"""In-memory channel registry backing one publisher instance."""

import threading
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, List, Optional, Union

from publisher.binding import Binding
from publisher.channel import Channel
from publisher.config import get_settings
from publisher.observability import Metrics, get_logger
from publisher.subscription import Subscription


class HandlerNotFoundError(LookupError):
    """Raised when a hitch subscription finds no callable under the channel name."""

    def __init__(self, target: Any, name: str) -> None:
        super().__init__(f"{type(target).__name__} has no callable {name!r} to subscribe")
        self.target = target
        self.name = name


class ChannelRegistry:
    """Mapping of channel name to its ordered bindings, with subscribe/publish.

    Channels are created on first subscribe and kept for the registry's life,
    even once emptied. One lock guards the mapping and every channel list;
    handlers always run outside of it so they may subscribe or publish again.
    """

    def __init__(self, owner: Any = None, isolate_errors: Optional[bool] = None) -> None:
        self._owner = owner
        self._channels: Dict[str, Channel] = {}
        self._lock = threading.RLock()
        if isolate_errors is None:
            isolate_errors = get_settings().isolate_handler_errors
        self._isolate_errors = isolate_errors
        self._metrics = Metrics()
        self._logger = get_logger("publisher.registry")

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    @property
    def isolate_errors(self) -> bool:
        return self._isolate_errors

    def get_or_create_channel(self, name: str) -> Channel:
        """Return existing channel or create and register a new one."""
        with self._lock:
            if name not in self._channels:
                self._channels[name] = Channel(name, lock=self._lock)
                self._metrics.set_gauge("channels", len(self._channels))
            return self._channels[name]

    def get_channel(self, name: str) -> Optional[Channel]:
        with self._lock:
            return self._channels.get(name)

    def subscribe(
        self,
        channel: Any,
        handler: Any = None,
        context: Any = None,
    ) -> Union[Subscription, Dict[str, Subscription], List[Subscription]]:
        """
        Register handlers. Accepted shapes:

        - subscribe("name", handler, context=None) -> Subscription
        - subscribe({"name": handler, ...}) -> {"name": Subscription, ...}
        - subscribe(obj, "name") -> Subscription for obj.name, context obj
        - subscribe(obj, ["a", "b"]) -> [Subscription, Subscription]

        Every returned handle is already attached.
        """
        if isinstance(channel, str):
            return self._subscribe_one(channel, handler, context)
        if isinstance(channel, Mapping) and handler is None:
            for name, fn in channel.items():
                self._check(name, fn)
            return {
                name: self._subscribe_one(name, fn, context)
                for name, fn in channel.items()
            }
        if isinstance(handler, str):
            return self.hitch(channel, handler)
        if isinstance(handler, Sequence) and not isinstance(handler, (bytes, bytearray)):
            resolved = [(name, self._lookup(channel, name)) for name in handler]
            return [self._subscribe_one(name, fn, channel) for name, fn in resolved]
        raise TypeError(
            f"cannot subscribe with ({type(channel).__name__}, {type(handler).__name__})"
        )

    def hitch(self, target: Any, name: str) -> Subscription:
        """Subscribe target's own callable `name` to the channel of that name."""
        return self._subscribe_one(name, self._lookup(target, name), target)

    @staticmethod
    def _lookup(target: Any, name: str) -> Callable[..., Any]:
        if not isinstance(name, str):
            raise TypeError(f"channel name must be str, got {type(name).__name__}")
        if isinstance(target, Mapping):
            handler = target.get(name)
        else:
            handler = getattr(target, name, None)
        if handler is None or not callable(handler):
            raise HandlerNotFoundError(target, name)
        return handler

    @staticmethod
    def _check(name: Any, handler: Any) -> None:
        if not isinstance(name, str):
            raise TypeError(f"channel name must be str, got {type(name).__name__}")
        if not callable(handler):
            raise TypeError(f"handler for {name!r} is not callable")

    def _subscribe_one(
        self, name: str, handler: Callable[..., Any], context: Any = None
    ) -> Subscription:
        self._check(name, handler)
        binding = Binding(handler=handler, context=context if context is not None else self._owner)
        subscription = Subscription(self.get_or_create_channel(name), binding)
        self._logger.debug("subscribed", extra={"channel": name})
        return subscription.attach()

    def publish(self, channel: str, *args: Any, **kwargs: Any) -> Union[List[Binding], bool]:
        """
        Invoke every binding of `channel` in order with the given arguments.
        Returns the bindings delivered to, or False if the channel has none.
        """
        target = self.get_channel(channel)
        bindings = target.snapshot() if target is not None else []
        if not bindings:
            self._metrics.increment("published_empty")
            return False
        target.mark_delivered()
        self._metrics.increment("published")
        self._logger.debug(
            "published",
            extra={"channel": channel, "subscriber_count": len(bindings)},
        )
        for binding in bindings:
            if not self._isolate_errors:
                binding(*args, **kwargs)
                self._metrics.increment("delivered")
                continue
            try:
                binding(*args, **kwargs)
                self._metrics.increment("delivered")
            except Exception as e:
                self._metrics.increment("delivery_failed")
                self._logger.exception(
                    "delivery_failed",
                    extra={"channel": channel, "binding": repr(binding), "error": str(e)},
                )
        return bindings

    def channels(self) -> List[Dict[str, Any]]:
        """Return list of {name, subscribers} for each channel."""
        with self._lock:
            return [
                {"name": c.name, "subscribers": c.subscriber_count}
                for c in self._channels.values()
            ]

    def stats(self) -> Dict[str, Dict[str, int]]:
        """Return { channel_name: { messages, subscribers } }."""
        with self._lock:
            return {
                name: {
                    "messages": c.messages_delivered,
                    "subscribers": c.subscriber_count,
                }
                for name, c in self._channels.items()
            }

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._channels

    def __repr__(self) -> str:
        return f"ChannelRegistry(channels={len(self._channels)}, owner={type(self._owner).__name__})"
