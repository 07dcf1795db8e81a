from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from inspect import Parameter
from typing import TYPE_CHECKING, Any, TypeAlias, get_type_hints

from wonderbox._internal.type_checks import is_runtime_class, unwrap_optional
from wonderbox._internal.type_key import TypeKey
from wonderbox.exceptions import (
    WonderboxInvalidRegistrationError,
    WonderboxProviderInferenceError,
)

if TYPE_CHECKING:
    from wonderbox.capability import AutoResolvable
    from wonderbox.container import Container

FactoryProvider: TypeAlias = Callable[[], Any]
"""A zero-argument callable producing a fresh value on each call."""

CloneFunction: TypeAlias = Callable[[Any], Any]
"""A callable duplicating a stored value without touching the container."""

_MISSING_ANNOTATION: Any = object()


class ProviderKind(Enum):
    """Select how a registered provider produces its value."""

    CLONE = auto()
    """Return a fresh clone of a value stored at registration time."""

    FACTORY = auto()
    """Call a zero-argument factory on every resolution."""

    AUTORESOLVED = auto()
    """Delegate to the class's ``autoresolve`` capability."""


@dataclass(kw_only=True, frozen=True, slots=True)
class ProviderSpec:
    """Describe how a single dependency key is produced.

    Exactly one provider source is set, matching ``kind``: a stored ``value``
    with its ``clone`` function, a ``factory``, or an ``autoresolvable`` class.
    """

    provides: TypeKey
    """The key this provider is registered under."""
    kind: ProviderKind

    value: Any = None
    """The stored value of a clone provider."""
    clone: CloneFunction | None = None
    """The function duplicating ``value`` on each resolution."""
    factory: FactoryProvider | None = None
    """The factory of a factory provider."""
    autoresolvable: type[AutoResolvable] | None = None
    """The class whose capability backs an auto-resolved provider."""

    @classmethod
    def for_clone(cls, provides: TypeKey, value: Any, clone: CloneFunction) -> ProviderSpec:
        return cls(provides=provides, kind=ProviderKind.CLONE, value=value, clone=clone)

    @classmethod
    def for_factory(cls, provides: TypeKey, factory: FactoryProvider) -> ProviderSpec:
        return cls(provides=provides, kind=ProviderKind.FACTORY, factory=factory)

    @classmethod
    def for_autoresolvable(
        cls,
        provides: TypeKey,
        autoresolvable: type[AutoResolvable],
    ) -> ProviderSpec:
        return cls(
            provides=provides,
            kind=ProviderKind.AUTORESOLVED,
            autoresolvable=autoresolvable,
        )

    def produce(self, container: Container) -> Any:
        """Produce a value for this key, or ``None`` when it cannot be built.

        Args:
            container: Container passed to auto-resolution capabilities.

        """
        if self.kind is ProviderKind.CLONE:
            if self.value is None:
                return None
            return self.clone(self.value)  # type: ignore[misc]
        if self.kind is ProviderKind.FACTORY:
            return self.factory()  # type: ignore[misc]
        return self.autoresolvable.autoresolve(container)  # type: ignore[union-attr]


@dataclass(slots=True)
class ProviderAnnotationsExtractor:
    """Infer registration keys and adapter dependencies from provider annotations."""

    def extract_return_type(self, provider: Callable[..., Any], *, provider_kind: str) -> Any:
        """Extract the key a factory or adapter provides from its return annotation.

        A class passed as the provider provides itself.

        Args:
            provider: Factory or adapter callable to inspect.
            provider_kind: Human-readable provider kind used in error messages.

        """
        if is_runtime_class(provider):
            return provider
        annotations, annotation_error = self._resolved_type_hints(provider)
        return_annotation = annotations.get("return", _MISSING_ANNOTATION)
        if return_annotation is _MISSING_ANNOTATION or return_annotation is type(None):
            msg = (
                f"Unable to infer return type for {provider_kind} '{self._provider_name(provider)}'. "
                "Add a return type annotation or pass provides= explicitly."
            )
            self._raise_inference_error(msg=msg, annotation_error=annotation_error)
        return return_annotation

    def extract_adapter_dependency(self, adapter: Callable[..., Any]) -> Any:
        """Extract the dependency an adapter receives, unwrapping ``T | None`` to ``T``.

        Args:
            adapter: Adapter callable taking exactly one positional parameter.

        """
        parameters = self.callable_parameters(adapter)
        provider_name = self._provider_name(adapter)
        if len(parameters) != 1 or parameters[0].kind not in (
            Parameter.POSITIONAL_ONLY,
            Parameter.POSITIONAL_OR_KEYWORD,
        ):
            msg = f"Adapter '{provider_name}' must accept exactly one positional parameter."
            raise WonderboxInvalidRegistrationError(msg)

        annotations, annotation_error = self._resolved_type_hints(adapter)
        annotation = annotations.get(parameters[0].name, _MISSING_ANNOTATION)
        if annotation is _MISSING_ANNOTATION:
            msg = (
                f"Unable to infer dependency for adapter '{provider_name}'. "
                "Annotate its parameter or pass dependency= explicitly."
            )
            self._raise_inference_error(msg=msg, annotation_error=annotation_error)
        return unwrap_optional(annotation)

    def validate_factory(self, factory: Callable[..., Any]) -> None:
        """Reject factories that cannot be called without arguments.

        Args:
            factory: Factory callable to validate.

        """
        if not callable(factory):
            msg = f"Factory {factory!r} is not callable."
            raise WonderboxInvalidRegistrationError(msg)
        required = [
            parameter.name
            for parameter in self.callable_parameters(factory)
            if parameter.default is Parameter.empty
            and parameter.kind not in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)
        ]
        if required:
            missing_parameters = ", ".join(f"'{name}'" for name in required)
            msg = (
                f"Factory '{self._provider_name(factory)}' must be callable without arguments. "
                f"Required parameters: {missing_parameters}."
            )
            raise WonderboxInvalidRegistrationError(msg)

    def callable_parameters(self, provider: Callable[..., Any]) -> tuple[Parameter, ...]:
        try:
            return tuple(inspect.signature(provider).parameters.values())
        except (TypeError, ValueError):
            # Builtins without signature metadata are assumed to take no arguments.
            return ()

    def _resolved_type_hints(
        self,
        provider: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        try:
            return get_type_hints(provider, include_extras=True), None
        except (AttributeError, NameError, TypeError) as error:
            return {}, error

    def _raise_inference_error(self, *, msg: str, annotation_error: Exception | None) -> None:
        if annotation_error is None:
            raise WonderboxProviderInferenceError(msg)
        full_msg = f"{msg} Original annotation error: {annotation_error}"
        raise WonderboxProviderInferenceError(full_msg) from annotation_error

    def _provider_name(self, provider: Callable[..., Any]) -> str:
        return getattr(provider, "__qualname__", repr(provider))
