from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeGuard, runtime_checkable

from wonderbox._internal.type_checks import is_runtime_class

if TYPE_CHECKING:
    from typing_extensions import Self

    from wonderbox.container import Container


@runtime_checkable
class AutoResolvable(Protocol):
    """Protocol for classes the container can construct from their dependencies.

    Implementations resolve each constructor dependency in declaration order
    with ``container.try_resolve`` and return ``None`` as soon as one of them
    is missing. They must not register anything on the container.

    Example:
        >>> class Greeter:
        ...     def __init__(self, greeting: str) -> None:
        ...         self.greeting = greeting
        ...
        ...     @classmethod
        ...     def autoresolve(cls, container: Container) -> Greeter | None:
        ...         greeting = container.try_resolve(str)
        ...         if greeting is None:
        ...             return None
        ...         return cls(greeting)

    Classes decorated with ``resolve_dependencies`` get a generated
    implementation instead.
    """

    @classmethod
    def autoresolve(cls, container: Container) -> Self | None:
        """Attempt to build an instance from dependencies held by the container.

        Args:
            container: Container used to resolve constructor dependencies.

        """


def is_autoresolvable(candidate: Any) -> TypeGuard[type[AutoResolvable]]:
    """Return true when candidate is a class exposing a callable ``autoresolve``."""
    return is_runtime_class(candidate) and callable(getattr(candidate, "autoresolve", None))


__all__ = ["AutoResolvable", "is_autoresolvable"]
