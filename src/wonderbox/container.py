from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any, TypeVar, overload

from wonderbox._internal.providers import (
    CloneFunction,
    FactoryProvider,
    ProviderAnnotationsExtractor,
    ProviderSpec,
)
from wonderbox._internal.registry import ProvidersRegistry
from wonderbox._internal.resolution_stack import current_chain, resolving
from wonderbox._internal.type_checks import unwrap_optional
from wonderbox._internal.type_key import TypeKey
from wonderbox.capability import is_autoresolvable
from wonderbox.defaults import DEFAULT_CLONE, DEFAULT_DETECT_CYCLES
from wonderbox.exceptions import (
    WonderboxInvalidRegistrationError,
    WonderboxRegistryCorruptionError,
)

T = TypeVar("T")
C = TypeVar("C", bound=type[Any])

logger = logging.getLogger(__name__)


class Container:
    """Register providers by type and resolve object graphs from them.

    Dependency keys are usually concrete classes, protocols or abstract base
    classes, or ``typing.Annotated`` / ``NewType`` tokens when several values
    share one runtime class.

    Four registration styles are available: a cloned value, a zero-argument
    factory, a class implementing the ``AutoResolvable`` capability, and an
    adapter applied to an already resolvable dependency. Re-registering a key
    replaces the previous provider.

    Resolution never raises for missing providers: ``resolve`` returns ``None``
    when the key, or any dependency needed to build it, is not registered.
    Exceptions are reserved for misuse (invalid registrations), cycles, and
    providers producing values of the wrong type.

    The container is not thread-safe. Guard it with a lock when registrations
    or resolutions may run concurrently.
    """

    def __init__(self, *, detect_cycles: bool = DEFAULT_DETECT_CYCLES) -> None:
        """Initialize an empty container.

        Args:
            detect_cycles: Raise ``WonderboxCircularDependencyError`` when a key
                is re-entered while it is being resolved. When disabled, cyclic
                graphs recurse until ``RecursionError``.

        """
        self._providers_registry = ProvidersRegistry()
        self._annotations_extractor = ProviderAnnotationsExtractor()
        self._detect_cycles = detect_cycles

    def register_clone(
        self,
        value: Any,
        *,
        provides: Any | None = None,
        clone: CloneFunction = DEFAULT_CLONE,
    ) -> None:
        """Register a value that is cloned on every resolution.

        Args:
            value: Value to store. Must not be ``None``.
            provides: Key to register under. Defaults to ``type(value)``.
            clone: Function duplicating the value. Defaults to ``copy.deepcopy``,
                so mutating one resolved instance never affects another.

        Examples:
            .. code-block:: python

                container.register_clone("postgresql://localhost/app")
                container.register_clone(settings, provides=BaseSettings)

        """
        if value is None:
            msg = "Cannot register None as a value; absence is represented by None."
            raise WonderboxInvalidRegistrationError(msg)

        key = TypeKey.of(type(value) if provides is None else provides)
        self._add(self._build_clone_spec(key=key, value=value, clone=clone))

    def register_factory(
        self,
        factory: FactoryProvider,
        *,
        provides: Any | None = None,
    ) -> None:
        """Register a zero-argument factory called on every resolution.

        Factories are not memoized. They may close over the container to resolve
        further dependencies when called; returning ``None`` means absence.

        Args:
            factory: Callable producing the value.
            provides: Key to register under. Defaults to the factory's return
                annotation, or to the factory itself when it is a class.

        Examples:
            .. code-block:: python

                def build_session() -> Session:
                    return Session(engine=container.resolve(Engine))

                container.register_factory(build_session)
                container.register_factory(Clock)

        """
        self._annotations_extractor.validate_factory(factory)
        if provides is None:
            provides = self._annotations_extractor.extract_return_type(
                factory,
                provider_kind="factory",
            )
        self._add(ProviderSpec.for_factory(TypeKey.of(provides), factory))

    def register_autoresolvable(self, autoresolvable: C, *, provides: Any | None = None) -> C:
        """Register a class built through its ``autoresolve`` capability.

        The class is returned unchanged, so the method also works as a class
        decorator.

        Args:
            autoresolvable: Class implementing ``AutoResolvable``, by hand or
                through ``resolve_dependencies``.
            provides: Key to register under. Defaults to the class itself.

        Examples:
            .. code-block:: python

                @container.register_autoresolvable
                @resolve_dependencies
                class UserService:
                    def __init__(self, repository: UserRepository) -> None:
                        self.repository = repository

        """
        if not is_autoresolvable(autoresolvable):
            msg = (
                f"{autoresolvable!r} does not implement autoresolve. Decorate it with "
                "@resolve_dependencies or define an autoresolve classmethod."
            )
            raise WonderboxInvalidRegistrationError(msg)

        key = TypeKey.of(autoresolvable if provides is None else provides)
        runtime_class = key.runtime_class
        if runtime_class is not None and not self._is_subclass(autoresolvable, runtime_class):
            msg = f"{autoresolvable.__qualname__} cannot be registered as {key.name}."
            raise WonderboxInvalidRegistrationError(msg)

        self._add(ProviderSpec.for_autoresolvable(key, autoresolvable))
        return autoresolvable

    def register_autoresolved(
        self,
        adapter: Callable[[Any], Any],
        *,
        dependency: Any | None = None,
        provides: Any | None = None,
        lazy: bool = False,
        clone: CloneFunction = DEFAULT_CLONE,
    ) -> None:
        """Register the result of applying an adapter to a resolved dependency.

        The adapter receives the resolved dependency or ``None`` and may tolerate
        absence. A dependency class implementing ``AutoResolvable`` does not need
        to be registered: it is built through its capability.

        By default the dependency is resolved and the adapter applied once, now:
        the result is stored as a cloned value, and registering the dependency
        later does not change it. With ``lazy=True`` both steps run on every
        resolution instead.

        Args:
            adapter: Callable taking the dependency (or ``None``).
            dependency: Key to resolve for the adapter. Defaults to the adapter's
                parameter annotation, with ``T | None`` unwrapped to ``T``.
                A registered provider for the key takes precedence over the
                key's own ``autoresolve``.
            provides: Key to register under. Defaults to the adapter's return
                annotation.
            lazy: Defer resolution and adaptation to each ``resolve`` call.
            clone: Function duplicating an eagerly adapted value.

        Examples:
            .. code-block:: python

                def as_notifier(sender: EmailSender | None) -> Notifier:
                    return sender if sender is not None else NullNotifier()

                container.register_autoresolved(as_notifier)

        """
        if not callable(adapter):
            msg = f"Adapter {adapter!r} is not callable."
            raise WonderboxInvalidRegistrationError(msg)
        if dependency is None:
            dependency = self._annotations_extractor.extract_adapter_dependency(adapter)
        else:
            dependency = unwrap_optional(dependency)
        if provides is None:
            provides = self._annotations_extractor.extract_return_type(
                adapter,
                provider_kind="adapter",
            )
        key = TypeKey.of(provides)
        dependency_key = TypeKey.of(dependency)

        if lazy:
            self._add(
                ProviderSpec.for_factory(
                    key,
                    lambda: adapter(self._resolve_adapter_dependency(dependency_key)),
                ),
            )
            return

        adapted = adapter(self._resolve_adapter_dependency(dependency_key))
        if adapted is None:
            logger.debug(
                "Adapter for %s returned None; %s resolves to None",
                dependency_key.name,
                key.name,
            )
        self._add(self._build_clone_spec(key=key, value=adapted, clone=clone))

    @overload
    def resolve(self, dependency: type[T]) -> T | None: ...

    @overload
    def resolve(self, dependency: Any) -> Any: ...

    def resolve(self, dependency: Any) -> Any:
        """Resolve a dependency, returning ``None`` when it cannot be built.

        Args:
            dependency: Key to resolve.

        Raises:
            WonderboxCircularDependencyError: The key is already being resolved.
            WonderboxRegistryCorruptionError: The provider produced a value that
                does not match the key.

        """
        key = TypeKey.of(dependency)
        spec = self._providers_registry.find(key)
        if spec is None:
            logger.debug(
                "No provider registered for %s (resolution chain: %s)",
                key.name,
                " -> ".join(chained.name for chained in current_chain(self)) or "<root>",
            )
            return None
        return self._produce(key, spec.produce)

    @overload
    def try_resolve(self, dependency: type[T]) -> T | None: ...

    @overload
    def try_resolve(self, dependency: Any) -> Any: ...

    def try_resolve(self, dependency: Any) -> Any:
        """Resolve a dependency from inside an ``autoresolve`` implementation.

        Behaves exactly like ``resolve``. Callers gathering several dependencies
        return ``None`` as soon as one result is ``None``, which skips the
        remaining lookups.

        Args:
            dependency: Key to resolve.

        """
        return self.resolve(dependency)

    def is_registered(self, dependency: Any) -> bool:
        """Return true when a provider is registered for the dependency key.

        Args:
            dependency: Key to look up.

        """
        return TypeKey.of(dependency) in self._providers_registry

    def _produce(self, key: TypeKey, producer: Callable[[Container], Any]) -> Any:
        if self._detect_cycles:
            with resolving(self, key):
                value = producer(self)
        else:
            value = producer(self)

        if value is None:
            logger.debug("Provider for %s produced no value", key.name)
            return None
        if not key.accepts(value):
            raise WonderboxRegistryCorruptionError(key, value)
        return value

    def _resolve_adapter_dependency(self, key: TypeKey) -> Any:
        # Unregistered auto-resolvable classes are built through their capability directly.
        if key in self._providers_registry or not is_autoresolvable(key.dependency):
            return self.resolve(key.dependency)
        return self._produce(key, key.dependency.autoresolve)

    def _add(self, spec: ProviderSpec) -> None:
        previous_spec = self._providers_registry.add(spec)
        if previous_spec is None:
            logger.debug("Registered %s provider for %s", spec.kind.name, spec.provides.name)
        else:
            logger.debug(
                "Replaced %s provider for %s with %s provider",
                previous_spec.kind.name,
                spec.provides.name,
                spec.kind.name,
            )

    def _build_clone_spec(self, *, key: TypeKey, value: Any, clone: CloneFunction) -> ProviderSpec:
        if value is not None:
            if not key.accepts(value):
                msg = f"Value of type {type(value).__qualname__} cannot be registered as {key.name}."
                raise WonderboxInvalidRegistrationError(msg)
            try:
                clone(value)
            except (TypeError, AttributeError, copy.Error) as error:
                msg = f"Value registered as {key.name} cannot be cloned: {error}"
                raise WonderboxInvalidRegistrationError(msg) from error
        return ProviderSpec.for_clone(key, value, clone)

    def _is_subclass(self, candidate: type[Any], runtime_class: type[Any]) -> bool:
        try:
            return issubclass(candidate, runtime_class)
        except TypeError:
            # Protocols with data members reject issubclass; defer to the resolve-time check.
            return True
