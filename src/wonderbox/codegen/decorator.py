from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar, overload

from wonderbox.codegen.planner import (
    ATTRIBUTE_NAME,
    AutoresolvePlan,
    AutoresolvePlanner,
    ConstructorSelection,
)
from wonderbox.codegen.renderer import AutoresolveTemplateRenderer
from wonderbox.defaults import DEFAULT_STRICT_GENERATION
from wonderbox.exceptions import WonderboxGenerationError

C = TypeVar("C", bound=type[Any])

logger = logging.getLogger(__name__)

_planner = AutoresolvePlanner()
_renderer = AutoresolveTemplateRenderer()


@overload
def resolve_dependencies(target: C, /) -> C: ...


@overload
def resolve_dependencies(*, strict: bool = ...) -> Callable[[C], C]: ...


def resolve_dependencies(
    target: Any = None,
    /,
    *,
    strict: bool = DEFAULT_STRICT_GENERATION,
) -> Any:
    """Generate an ``autoresolve`` implementation from a class's constructor.

    The class must have exactly one eligible constructor: ``__init__`` or a
    ``staticmethod``/``classmethod`` returning the class (or ``Self``). The
    generated ``autoresolve`` resolves each constructor parameter in declared
    order with ``container.try_resolve`` and returns ``None`` as soon as one is
    missing.

    Usage errors produce a ``GenerationDiagnostic`` pointing at the offending
    source. By default it is reported as a ``WonderboxGenerationWarning`` and
    the class is returned unchanged; with ``strict=True`` it is raised as
    ``WonderboxGenerationError``.

    Parameter annotations naming classes that are not defined yet are evaluated
    when ``autoresolve`` is first called. A name that is still undefined then is
    reported at that point, and that call returns ``None`` unless ``strict``.

    Args:
        target: Class to decorate when used without arguments.
        strict: Raise diagnostics instead of warning.

    Examples:
        .. code-block:: python

            @resolve_dependencies
            class Foo:
                def __init__(self, stored_string: str) -> None:
                    self.stored_string = stored_string


            @resolve_dependencies(strict=True)
            class Bar:
                @staticmethod
                def new(foo: Foo) -> Bar:
                    return Bar()

    """
    if target is None:
        return lambda decorated: _generate(decorated, strict=strict)
    return _generate(target, strict=strict)


autoresolvable = resolve_dependencies


def _generate(target: C, *, strict: bool) -> C:
    if not inspect.isclass(target):
        msg = f"{ATTRIBUTE_NAME} needs to be placed over a class, got {target!r}"
        raise WonderboxGenerationError(msg)

    try:
        selection = _planner.select(target)
        if not _planner.annotations_resolvable(selection):
            return _defer(target, selection, strict=strict)
        plan = _planner.plan(selection)
    except WonderboxGenerationError as error:
        _report(error, strict=strict)
        return target

    _attach(target, plan)
    return target


def _defer(target: C, selection: ConstructorSelection, *, strict: bool) -> C:
    # Annotations may name classes defined later in the module; evaluate them on first use.
    def autoresolve(cls: type[Any], container: Any) -> Any:
        try:
            plan = _planner.plan(selection)
        except WonderboxGenerationError as error:
            _report(error, strict=strict)
            return None
        return _attach(target, plan)(cls, container)

    autoresolve.__module__ = target.__module__
    autoresolve.__qualname__ = f"{target.__qualname__}.autoresolve"
    target.autoresolve = classmethod(autoresolve)  # type: ignore[attr-defined]
    logger.debug("Deferring autoresolve generation for %s until first use", target.__qualname__)
    return target


def _attach(target: type[Any], plan: AutoresolvePlan) -> Callable[..., Any]:
    generated = _renderer.build_autoresolve(plan)
    generated.function.__module__ = target.__module__
    generated.function.__qualname__ = f"{target.__qualname__}.autoresolve"
    target.autoresolve = classmethod(generated.function)  # type: ignore[attr-defined]
    target.__wonderbox_source__ = generated.source  # type: ignore[attr-defined]
    return generated.function


def _report(error: WonderboxGenerationError, *, strict: bool) -> None:
    if strict or error.diagnostic is None:
        raise error
    logger.debug("Skipping autoresolve generation: %s", error.diagnostic)
    error.diagnostic.emit()
