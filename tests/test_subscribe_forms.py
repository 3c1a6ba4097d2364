import pytest

from publisher import HandlerNotFoundError, Subscription, current_context


class Widget:
    def __init__(self):
        self.calls = []

    def open(self, *args):
        self.calls.append(("open", args, current_context()))

    def close(self):
        self.calls.append(("close", (), current_context()))

    label = "not callable"


def test_mapping_form_returns_handle_per_key(pub, recorder):
    sad, happy = recorder(), recorder()
    handles = pub.subscribe({"☹": sad, "☺": happy})
    assert set(handles) == {"☹", "☺"}
    assert all(isinstance(h, Subscription) and h.attached for h in handles.values())

    pub.publish("☹")
    pub.publish("☺")
    assert len(sad.calls) == 1
    assert len(happy.calls) == 1

    handles["☹"].detach()
    assert pub.publish("☹") is False


def test_hitch_binds_method_with_object_context(pub):
    widget = Widget()
    subscription = pub.subscribe(widget, "open")
    assert subscription.channel == "open"
    assert subscription.context is widget

    pub.publish("open", 1)
    assert widget.calls == [("open", (1,), widget)]


def test_hitch_multiple_preserves_order(pub):
    widget = Widget()
    handles = pub.subscribe(widget, ["open", "close"])
    assert [h.channel for h in handles] == ["open", "close"]

    pub.publish("close")
    pub.publish("open")
    assert [c[0] for c in widget.calls] == ["close", "open"]


def test_hitch_on_mapping_uses_items(pub, recorder):
    snowman = recorder()
    table = {"☃": snowman}
    subscription = pub.subscribe(table, "☃")
    assert subscription.context is table
    pub.publish("☃")
    assert len(snowman.calls) == 1


def test_hitch_missing_attribute_raises_lookup_error(pub):
    with pytest.raises(LookupError):
        pub.subscribe(Widget(), "missing")


def test_hitch_non_callable_raises(pub):
    with pytest.raises(HandlerNotFoundError) as excinfo:
        pub.subscribe(Widget(), "label")
    assert excinfo.value.name == "label"
    assert "label" not in pub.registry


def test_non_callable_handler_rejected(pub):
    with pytest.raises(TypeError):
        pub.subscribe("test", "not a function")


def test_unsupported_shape_rejected(pub):
    with pytest.raises(TypeError):
        pub.subscribe(42, 42)


def test_hitch_multiple_with_missing_name_attaches_nothing(pub):
    widget = Widget()
    with pytest.raises(HandlerNotFoundError):
        pub.subscribe(widget, ["open", "missing"])
    assert pub.publish("open") is False
    assert widget.calls == []


def test_mapping_with_non_callable_attaches_nothing(pub, recorder):
    rec = recorder()
    with pytest.raises(TypeError):
        pub.subscribe({"a": rec, "b": "not callable"})
    assert pub.publish("a") is False
    assert rec.calls == []


def test_hitch_with_bytes_names_rejected(pub):
    with pytest.raises(TypeError, match="cannot subscribe"):
        pub.subscribe(Widget(), b"ab")
