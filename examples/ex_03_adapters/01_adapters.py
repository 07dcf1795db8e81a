"""Adapters: expose a concrete class under an abstract interface.

``register_autoresolved`` resolves the adapter's dependency, applies the
adapter, and registers the result under the adapter's return type. The
concrete class does not need to be registered when it implements
``autoresolve``. By default this happens once at registration time; with
``lazy=True`` it happens on every resolution.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wonderbox import Container, resolve_dependencies


class Notifier(ABC):
    @abstractmethod
    def notify(self, message: str) -> str: ...


@resolve_dependencies
class EmailNotifier(Notifier):
    def __init__(self, address: str) -> None:
        self.address = address

    def notify(self, message: str) -> str:
        return f"email to {self.address}: {message}"


class NullNotifier(Notifier):
    def notify(self, message: str) -> str:
        return f"dropped: {message}"


def as_notifier(sender: EmailNotifier | None) -> Notifier:
    if sender is None:
        return NullNotifier()
    return sender


def _notify(container: Container, message: str) -> str | None:
    notifier = container.resolve(Notifier)
    return notifier.notify(message) if notifier else None


def main() -> None:
    container = Container()
    container.register_autoresolved(as_notifier)
    print(_notify(container, "deploy"))  # => dropped: deploy

    container.register_clone("ops@example.com")
    print(_notify(container, "deploy"))  # => dropped: deploy

    container.register_autoresolved(as_notifier)
    print(_notify(container, "deploy"))  # => email to ops@example.com: deploy

    lazy = Container()
    lazy.register_autoresolved(as_notifier, lazy=True)
    print(_notify(lazy, "build"))  # => dropped: build

    lazy.register_clone("dev@example.com")
    print(_notify(lazy, "build"))  # => email to dev@example.com: build


if __name__ == "__main__":
    main()
