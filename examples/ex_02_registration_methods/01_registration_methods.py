"""Registration methods: clones, factories, and auto-resolvable classes.

A cloned value is copied on every resolution, a factory is called on every
resolution, and an auto-resolvable class builds itself from other keys.
Registering a key again replaces its provider.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wonderbox import Container


@dataclass
class Settings:
    debug: bool
    tags: list[str] = field(default_factory=list)


class Clock:
    def __init__(self) -> None:
        self.ticks = 0


def build_clock() -> Clock:
    return Clock()


class Greeter:
    def __init__(self, greeting: str) -> None:
        self.greeting = greeting

    @classmethod
    def autoresolve(cls, container: Container) -> Greeter | None:
        greeting = container.try_resolve(str)
        if greeting is None:
            return None
        return cls(greeting)

    def greet(self, name: str) -> str:
        return f"{self.greeting}, {name}!"


def main() -> None:
    container = Container()

    container.register_clone(Settings(debug=True, tags=["web"]))
    first = container.resolve(Settings)
    if first is not None:
        first.tags.append("mutated")
    second = container.resolve(Settings)
    print(f"clone_isolated={second.tags if second else None}")  # => clone_isolated=['web']

    container.register_factory(build_clock)
    print(f"factory_fresh={container.resolve(Clock) is not container.resolve(Clock)}")  # => factory_fresh=True

    container.register_autoresolvable(Greeter)
    print(f"greeter_without_greeting={container.resolve(Greeter)}")  # => greeter_without_greeting=None

    container.register_clone("Hello")
    greeter = container.resolve(Greeter)
    print(greeter.greet("world") if greeter else None)  # => Hello, world!

    container.register_clone("Hi")
    greeter = container.resolve(Greeter)
    print(greeter.greet("world") if greeter else None)  # => Hi, world!

    print(f"registered={container.is_registered(Greeter)}")  # => registered=True


if __name__ == "__main__":
    main()
