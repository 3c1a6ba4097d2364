"""Example: channels and method advice on the default publisher."""

import logging

import publisher

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("example")


class DatePicker:
    def __init__(self) -> None:
        self.value = None

    def select(self, new_value):
        old_value, self.value = self.value, new_value
        self.publish("select", new_value, old_value)
        return new_value


def main() -> None:
    publisher.subscribe("user/signup", lambda user_id: log.info("signup %s", user_id))
    publisher.publish("user/signup", 101)

    picker = publisher.create_publisher(DatePicker())
    subscription = picker.subscribe("select", lambda new, old: log.info("select %s -> %s", old, new))

    publisher.advise(picker).before("select", "datepicker/selecting").after("select", "datepicker/selected")
    publisher.subscribe("datepicker/selecting", lambda value, target: log.info("selecting %s", value))
    publisher.subscribe("datepicker/selected", lambda value, target: log.info("selected %s", value))

    picker.select("2011-08-25")
    subscription.detach()
    picker.select("2011-08-26")


if __name__ == "__main__":
    main()
