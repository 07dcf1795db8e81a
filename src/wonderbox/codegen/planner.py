from __future__ import annotations

import inspect
import sys
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import Any, get_type_hints

from wonderbox._internal.type_checks import is_self_annotation, is_trait_like
from wonderbox.codegen.diagnostics import GenerationDiagnostic
from wonderbox.exceptions import WonderboxGenerationError

ATTRIBUTE_NAME = "@resolve_dependencies"
_MISSING_ANNOTATION: Any = object()


@dataclass(frozen=True, slots=True)
class ConstructorDependency:
    """A constructor parameter resolved from the container."""

    name: str
    provides: Any
    kind: Any
    """The ``inspect.Parameter`` kind, deciding positional or keyword passing."""

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is Parameter.KEYWORD_ONLY


@dataclass(frozen=True, slots=True)
class AutoresolvePlan:
    """Everything needed to render ``autoresolve`` for one class."""

    owner: type[Any]
    constructor_name: str
    dependencies: tuple[ConstructorDependency, ...]

    @property
    def uses_init(self) -> bool:
        return self.constructor_name == "__init__"


@dataclass(frozen=True, slots=True)
class _Constructor:
    name: str
    function: Callable[..., Any]
    has_implicit_first_parameter: bool


@dataclass(frozen=True, slots=True)
class ConstructorSelection:
    """The eligible constructor of a class and the parameters it is called with.

    Parameter annotations are not evaluated yet, so a selection can refer to
    classes defined later in the module.
    """

    owner: type[Any]
    constructor_name: str
    function: Callable[..., Any]
    parameters: tuple[Parameter, ...]


class AutoresolvePlanner:
    """Select the single eligible constructor of a class and describe its dependencies.

    Eligible constructors are looked up in the class body only: ``__init__``,
    and ``staticmethod``/``classmethod`` members annotated to return the class
    itself or ``Self``. Planning runs in two steps: ``select`` checks the class
    and constructor shape, ``plan`` evaluates parameter annotations. Every
    problem is raised as ``WonderboxGenerationError`` carrying a located
    ``GenerationDiagnostic``.
    """

    def build(self, owner: type[Any]) -> AutoresolvePlan:
        """Plan generation of ``autoresolve`` for owner in one step.

        Args:
            owner: Class decorated with ``resolve_dependencies``.

        """
        return self.plan(self.select(owner))

    def select(self, owner: type[Any]) -> ConstructorSelection:
        """Pick the eligible constructor of owner and validate its parameter shapes.

        Args:
            owner: Class decorated with ``resolve_dependencies``.

        """
        if is_trait_like(owner):
            self._fail(
                owner,
                f"{ATTRIBUTE_NAME} must be placed over a concrete class, "
                f"not a protocol or abstract class ({owner.__qualname__})",
            )
        if "autoresolve" in vars(owner):
            self._fail(
                owner,
                f"{owner.__qualname__} already implements autoresolve; "
                f"remove it or drop {ATTRIBUTE_NAME}",
            )

        constructors = self._eligible_constructors(owner)
        if len(constructors) != 1:
            self._fail(owner, f"Expected one constructor, found {len(constructors)}")

        constructor = constructors[0]
        parameters = list(inspect.signature(constructor.function).parameters.values())
        if constructor.has_implicit_first_parameter:
            parameters = parameters[1:]

        for parameter in parameters:
            if parameter.kind in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD):
                self._fail(
                    constructor.function,
                    "Only normal, non self type parameters are supported "
                    f"(found variadic parameter '{parameter.name}')",
                )
            if parameter.annotation is Parameter.empty:
                self._fail(
                    constructor.function,
                    f"Parameter '{parameter.name}' needs a resolvable type annotation",
                )
            if self._is_owner_annotation(owner, parameter.annotation):
                self._fail_self_typed(constructor.function, parameter.name)

        return ConstructorSelection(
            owner=owner,
            constructor_name=constructor.name,
            function=constructor.function,
            parameters=tuple(parameters),
        )

    def annotations_resolvable(self, selection: ConstructorSelection) -> bool:
        """Return true when every annotation of the selected constructor can be evaluated now."""
        _, annotation_error = self._type_hints(selection.owner, selection.function)
        return annotation_error is None

    def plan(self, selection: ConstructorSelection) -> AutoresolvePlan:
        """Evaluate the selected constructor's annotations into dependency keys.

        Args:
            selection: Constructor chosen by ``select``.

        """
        hints, annotation_error = self._type_hints(selection.owner, selection.function)
        dependencies: list[ConstructorDependency] = []
        for parameter in selection.parameters:
            annotation = hints.get(parameter.name, _MISSING_ANNOTATION)
            if annotation is _MISSING_ANNOTATION:
                message = f"Parameter '{parameter.name}' needs a resolvable type annotation"
                if annotation_error is not None:
                    message = f"{message}: {annotation_error}"
                self._fail(selection.function, message)
            if annotation is selection.owner or is_self_annotation(annotation):
                self._fail_self_typed(selection.function, parameter.name)
            dependencies.append(
                ConstructorDependency(
                    name=parameter.name,
                    provides=annotation,
                    kind=parameter.kind,
                ),
            )
        return AutoresolvePlan(
            owner=selection.owner,
            constructor_name=selection.constructor_name,
            dependencies=tuple(dependencies),
        )

    def _eligible_constructors(self, owner: type[Any]) -> list[_Constructor]:
        constructors: list[_Constructor] = []
        for name, member in vars(owner).items():
            if name == "__init__" and inspect.isfunction(member):
                constructors.append(_Constructor(name, member, has_implicit_first_parameter=True))
            elif isinstance(member, staticmethod) and self._returns_owner(owner, member.__func__):
                constructors.append(
                    _Constructor(name, member.__func__, has_implicit_first_parameter=False),
                )
            elif isinstance(member, classmethod) and self._returns_owner(owner, member.__func__):
                constructors.append(
                    _Constructor(name, member.__func__, has_implicit_first_parameter=True),
                )
        return constructors

    def _returns_owner(self, owner: type[Any], function: Callable[..., Any]) -> bool:
        hints, _ = self._type_hints(owner, function)
        return_annotation = hints.get("return", _MISSING_ANNOTATION)
        if return_annotation is _MISSING_ANNOTATION:
            return self._is_owner_annotation(owner, inspect.signature(function).return_annotation)
        return return_annotation is owner or is_self_annotation(return_annotation)

    def _is_owner_annotation(self, owner: type[Any], annotation: Any) -> bool:
        # String annotations are compared by name; evaluated ones by identity.
        if isinstance(annotation, str):
            return annotation in (owner.__name__, "Self")
        return annotation is owner or is_self_annotation(annotation)

    def _type_hints(
        self,
        owner: type[Any],
        function: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        # The decorated class is not bound in its module yet, so expose it by name.
        globalns = getattr(function, "__globals__", None)
        if not globalns:
            module = sys.modules.get(owner.__module__)
            globalns = dict(vars(module)) if module is not None else {}
        localns = {owner.__name__: owner}
        try:
            return get_type_hints(function, globalns, localns, include_extras=True), None
        except (AttributeError, NameError, TypeError) as error:
            return {}, error

    def _fail_self_typed(self, function: Callable[..., Any], parameter_name: str) -> None:
        self._fail(
            function,
            "Only normal, non self type parameters are supported "
            f"(parameter '{parameter_name}' is typed as the class itself)",
        )

    def _fail(self, target: Any, message: str) -> None:
        diagnostic = GenerationDiagnostic.at(target, message)
        raise WonderboxGenerationError(str(diagnostic), diagnostic)
