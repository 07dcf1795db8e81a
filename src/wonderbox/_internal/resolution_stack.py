from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from wonderbox._internal.type_key import TypeKey
from wonderbox.exceptions import WonderboxCircularDependencyError

# Keys currently being resolved, outermost first, tagged with the id of the owning container.
_resolution_stack: ContextVar[tuple[tuple[int, TypeKey], ...]] = ContextVar(
    "wonderbox_resolution_stack",
    default=(),
)


def current_chain(owner: object) -> tuple[TypeKey, ...]:
    """Return the keys the given container is resolving in the current context."""
    owner_id = id(owner)
    return tuple(key for entry_owner, key in _resolution_stack.get() if entry_owner == owner_id)


@contextmanager
def resolving(owner: object, key: TypeKey) -> Iterator[None]:
    """Mark key as in progress for owner until the block exits.

    Raises ``WonderboxCircularDependencyError`` when key is already in progress
    for the same owner.
    """
    stack = _resolution_stack.get()
    entry = (id(owner), key)
    if entry in stack:
        cycle_start = stack.index(entry)
        chain = tuple(
            stacked_key
            for stacked_owner, stacked_key in stack[cycle_start:]
            if stacked_owner == entry[0]
        )
        raise WonderboxCircularDependencyError((*chain, key))

    token = _resolution_stack.set((*stack, entry))
    try:
        yield
    finally:
        _resolution_stack.reset(token)
