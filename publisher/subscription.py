"""Subscription handle: caller-held token to attach/detach one binding."""

from typing import TYPE_CHECKING, Any, Callable

from publisher.observability import get_logger

if TYPE_CHECKING:
    from publisher.binding import Binding
    from publisher.channel import Channel


class Subscription:
    """Controls exactly one binding on one channel of one registry.

    The handle keeps a reference to the channel it was created for, so it stays
    usable even when its publisher has been given a fresh registry since.
    """

    def __init__(self, channel: "Channel", binding: "Binding") -> None:
        self._channel = channel
        self._binding = binding
        self._logger = get_logger("publisher.subscription")

    @property
    def channel(self) -> str:
        return self._channel.name

    @property
    def binding(self) -> "Binding":
        return self._binding

    @property
    def handler(self) -> Callable[..., Any]:
        return self._binding.handler

    @property
    def context(self) -> Any:
        return self._binding.context

    @property
    def attached(self) -> bool:
        """True while at least one copy of the binding is in the channel."""
        return self._channel.contains(self._binding)

    def attach(self) -> "Subscription":
        """Append the binding at the tail of the channel.

        Not idempotent: attaching an attached handle adds a second copy, and the
        handler then fires once per copy until each copy is detached.
        """
        self._channel.append(self._binding)
        self._logger.debug(
            "attached",
            extra={"channel": self._channel.name, "subscribers": self._channel.subscriber_count},
        )
        return self

    def detach(self) -> "Subscription":
        """Remove one copy of the binding; a no-op when it is not attached."""
        removed = self._channel.remove(self._binding)
        if removed:
            self._logger.debug(
                "detached",
                extra={"channel": self._channel.name, "subscribers": self._channel.subscriber_count},
            )
        return self

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(channel={self._channel.name!r}, attached={self.attached})"
