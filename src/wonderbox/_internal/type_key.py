from __future__ import annotations

from dataclasses import dataclass
from typing import Any, get_origin

from wonderbox._internal.type_checks import (
    is_runtime_checkable,
    is_runtime_class,
    is_union_annotation,
    unwrap_annotated,
)
from wonderbox.exceptions import WonderboxInvalidRegistrationError


@dataclass(frozen=True, slots=True)
class TypeKey:
    """Identify a requested type in the registry.

    Keys compare by the type form they wrap, so ``Annotated`` aliases and
    ``NewType`` declarations are distinct from their underlying class, and two
    classes with the same fields never share a key.
    """

    dependency: Any

    @classmethod
    def of(cls, dependency: Any) -> TypeKey:
        """Build a key for a type form, rejecting forms that cannot be looked up.

        Args:
            dependency: Class, protocol, or typing construct identifying a dependency.

        """
        if dependency is None or dependency is type(None):
            msg = "None cannot be used as a dependency key; absence is represented by None."
            raise WonderboxInvalidRegistrationError(msg)
        try:
            hash(dependency)
        except TypeError as error:
            msg = f"Dependency key {dependency!r} is not hashable."
            raise WonderboxInvalidRegistrationError(msg) from error
        return cls(dependency=dependency)

    @property
    def name(self) -> str:
        if is_runtime_class(self.dependency):
            return self.dependency.__qualname__
        return repr(self.dependency)

    @property
    def runtime_class(self) -> type[Any] | None:
        """Return the class values of this key must be instances of, if it can be checked."""
        target = unwrap_annotated(self.dependency)
        while callable(target) and hasattr(target, "__supertype__"):
            target = unwrap_annotated(target.__supertype__)
        if is_union_annotation(target):
            return None
        origin = get_origin(target)
        if origin is not None:
            target = origin
        if not is_runtime_class(target) or target is object or target is Any:
            return None
        if not is_runtime_checkable(target):
            return None
        return target

    def accepts(self, value: Any) -> bool:
        """Return true when value can be handed out for this key."""
        runtime_class = self.runtime_class
        if runtime_class is None:
            return True
        return isinstance(value, runtime_class)

    def __repr__(self) -> str:
        return f"TypeKey({self.name})"
