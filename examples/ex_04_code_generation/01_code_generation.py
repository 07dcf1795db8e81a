"""Code generation: derive ``autoresolve`` from a single constructor.

``resolve_dependencies`` accepts ``__init__`` (including dataclass-generated
ones) or one ``staticmethod``/``classmethod`` returning the class. Problems are
reported as ``WonderboxGenerationWarning`` and leave the class unchanged, or
raised with ``strict=True``.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass

from typing_extensions import Self

from wonderbox import Container, WonderboxGenerationError, resolve_dependencies


@resolve_dependencies
@dataclass
class Foo:
    stored_string: str


class _PoolBase:
    def __init__(self, dsn: str, size: int) -> None:
        self.dsn = dsn
        self.size = size


@resolve_dependencies
class Pool(_PoolBase):
    @classmethod
    def create(cls, dsn: str, *, size: int) -> Self:
        return cls(dsn, size)


def main() -> None:
    container = Container()
    container.register_clone("foo")
    container.register_autoresolvable(Foo)
    print(container.resolve(Foo))  # => Foo(stored_string='foo')

    generated_source: str = Foo.__wonderbox_source__  # type: ignore[attr-defined]
    print(generated_source.splitlines()[0])  # => def autoresolve(cls, container):

    container.register_clone(4)
    container.register_autoresolvable(Pool)
    pool = container.resolve(Pool)
    print(f"pool={pool.dsn if pool else None} size={pool.size if pool else None}")  # => pool=foo size=4

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")

        @resolve_dependencies
        class Variadic:
            def __init__(self, *parts: str) -> None:
                self.parts = parts

    print(f"warning={caught[0].category.__name__}")  # => warning=WonderboxGenerationWarning
    print(caught[0].message)  # => Only normal, non self type parameters are supported (found variadic parameter 'parts')
    print(f"unchanged={'autoresolve' not in vars(Variadic)}")  # => unchanged=True

    try:

        @resolve_dependencies(strict=True)
        class NoConstructor:
            value = 1

    except WonderboxGenerationError as error:
        message = error.diagnostic.message if error.diagnostic else str(error)
        print(f"strict={message}")  # => strict=Expected one constructor, found 0


if __name__ == "__main__":
    main()
