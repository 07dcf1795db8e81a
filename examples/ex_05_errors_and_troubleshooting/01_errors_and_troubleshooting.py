"""Errors and troubleshooting.

Missing dependencies are not errors: ``resolve`` returns ``None``. Exceptions
are reserved for invalid registrations, circular dependencies, and providers
producing values of the wrong type.
"""

from __future__ import annotations

from dataclasses import dataclass

from wonderbox import (
    Container,
    WonderboxCircularDependencyError,
    WonderboxInvalidRegistrationError,
    WonderboxProviderInferenceError,
    WonderboxRegistryCorruptionError,
)


@dataclass
class Chicken:
    egg: Egg | None


@dataclass
class Egg:
    chicken: Chicken | None


def _missing_dependency() -> None:
    container = Container()
    print(f"missing={container.resolve(Chicken)}")  # => missing=None


def _invalid_registration() -> None:
    container = Container()
    try:
        container.register_clone(None)
    except WonderboxInvalidRegistrationError as error:
        print(error)  # => Cannot register None as a value; absence is represented by None.


def _missing_annotation() -> None:
    container = Container()
    try:
        container.register_factory(lambda: Chicken(None))
    except WonderboxProviderInferenceError as error:
        print(f"inference={type(error).__name__}")  # => inference=WonderboxProviderInferenceError


def _circular_dependency() -> None:
    container = Container()
    container.register_factory(lambda: Chicken(container.resolve(Egg)), provides=Chicken)
    container.register_factory(lambda: Egg(container.resolve(Chicken)), provides=Egg)
    try:
        container.resolve(Chicken)
    except WonderboxCircularDependencyError as error:
        print(error)  # => Circular dependency detected: Chicken -> Egg -> Chicken


def _corrupted_registry() -> None:
    container = Container()
    container.register_factory(lambda: "not a number", provides=int)
    try:
        container.resolve(int)
    except WonderboxRegistryCorruptionError as error:
        print(error)  # => Provider for int produced a value of type str; the registry is inconsistent.


def main() -> None:
    _missing_dependency()
    _invalid_registration()
    _missing_annotation()
    _circular_dependency()
    _corrupted_registry()


if __name__ == "__main__":
    main()
