from __future__ import annotations

import inspect
import types
from typing import Annotated, Any, TypeGuard, Union, get_args, get_origin


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol_class(candidate: object) -> bool:
    """Return true when candidate is a ``typing.Protocol`` subclass that declares a protocol."""
    return is_runtime_class(candidate) and bool(getattr(candidate, "_is_protocol", False))


def is_runtime_checkable(candidate: type[Any]) -> bool:
    """Return true when ``isinstance`` checks against candidate are permitted."""
    if not is_protocol_class(candidate):
        return True
    return bool(getattr(candidate, "_is_runtime_protocol", False))


def is_trait_like(candidate: type[Any]) -> bool:
    """Return true for protocols and abstract classes, which cannot be constructed directly."""
    return is_protocol_class(candidate) or inspect.isabstract(candidate)


def unwrap_annotated(annotation: Any) -> Any:
    """Recursively unwrap ``Annotated[T, ...]`` into ``T``.

    Args:
        annotation: Annotation value to inspect or normalize.

    """
    if get_origin(annotation) is not Annotated:
        return annotation
    return unwrap_annotated(get_args(annotation)[0])


def is_union_annotation(annotation: Any) -> bool:
    """Return true for ``A | B`` and ``typing.Union[A, B]`` annotations."""
    origin = get_origin(annotation)
    return origin is types.UnionType or origin is Union


def unwrap_optional(annotation: Any) -> Any:
    """Return ``T`` for ``T | None`` / ``Optional[T]``; other annotations are returned as is."""
    if not is_union_annotation(annotation):
        return annotation
    members = [arg for arg in get_args(annotation) if arg is not type(None)]
    if len(members) != 1:
        return annotation
    return members[0]


def is_self_annotation(annotation: Any) -> bool:
    """Return true when annotation is ``typing.Self`` or ``typing_extensions.Self``."""
    unwrapped_annotation = unwrap_annotated(annotation)
    annotation_module = getattr(unwrapped_annotation, "__module__", None)
    if annotation_module not in {"typing", "typing_extensions"}:
        return False
    annotation_name = getattr(
        unwrapped_annotation,
        "__qualname__",
        getattr(unwrapped_annotation, "_name", None),
    )
    return annotation_name == "Self" or repr(unwrapped_annotation).endswith(".Self")


__all__ = [
    "is_protocol_class",
    "is_runtime_checkable",
    "is_runtime_class",
    "is_self_annotation",
    "is_trait_like",
    "is_union_annotation",
    "unwrap_annotated",
    "unwrap_optional",
]
