"""In-process publish/subscribe over named channels, with method advice.

The package doubles as the process-wide default publisher::

    import publisher

    publisher.subscribe("user/signup", on_signup)
    publisher.publish("user/signup", user)

    datepicker = publisher.create_publisher(DatePicker())
    publisher.advise(datepicker).before("open", "datepicker/open")
"""

from publisher.advice import AdvisedMethod, Advisor, advise
from publisher.binding import Binding, current_context
from publisher.channel import Channel
from publisher.config import PublisherSettings, get_settings
from publisher.factory import Publisher, create_publisher
from publisher.registry import ChannelRegistry, HandlerNotFoundError
from publisher.subscription import Subscription


def subscribe(*args, **kwargs):
    """Subscribe on the default publisher (see ChannelRegistry.subscribe)."""
    return create_publisher.subscribe(*args, **kwargs)


def publish(channel, *args, **kwargs):
    """Publish on the default publisher (see ChannelRegistry.publish)."""
    return create_publisher.publish(channel, *args, **kwargs)


__all__ = [
    "AdvisedMethod",
    "Advisor",
    "Binding",
    "Channel",
    "ChannelRegistry",
    "HandlerNotFoundError",
    "Publisher",
    "PublisherSettings",
    "Subscription",
    "advise",
    "create_publisher",
    "current_context",
    "get_settings",
    "publish",
    "subscribe",
]
