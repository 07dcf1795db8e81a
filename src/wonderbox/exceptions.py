from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wonderbox._internal.type_key import TypeKey
    from wonderbox.codegen.diagnostics import GenerationDiagnostic


class WonderboxError(Exception):
    """Represent a base class for all wonderbox-specific failures.

    Catch this type when you want to handle any wonderbox error path without
    matching each concrete exception class individually. Ordinary absence of a
    dependency is never reported through this hierarchy: ``resolve`` returns
    ``None`` instead.
    """


class WonderboxInvalidRegistrationError(WonderboxError):
    """Signal invalid registration arguments.

    Raised by ``Container.register_clone``, ``Container.register_factory``,
    ``Container.register_autoresolvable`` and ``Container.register_autoresolved``
    when the registered object cannot back the requested key.

    Typical fixes include registering a non-``None`` value, passing a class that
    implements ``autoresolve``, or passing ``provides=`` that the value satisfies.
    """


class WonderboxProviderInferenceError(WonderboxInvalidRegistrationError):
    """Signal that a key or dependency cannot be inferred from annotations.

    Common triggers are factories or adapters without a return annotation, and
    adapters whose single parameter has no usable annotation.

    Typical fixes include adding annotations or passing ``provides=`` /
    ``dependency=`` explicitly.
    """


class WonderboxRegistryCorruptionError(WonderboxError):
    """Signal that a provider produced a value of the wrong type.

    This is an internal-consistency failure, not ordinary absence: a value
    produced for ``key`` is not an instance of the key's runtime class. It is
    raised by ``resolve``/``try_resolve`` and should be treated as fatal.
    """

    def __init__(self, key: TypeKey, value: Any) -> None:
        self.key = key
        self.value_type = type(value)
        super().__init__(
            f"Provider for {key.name} produced a value of type "
            f"{self.value_type.__qualname__}; the registry is inconsistent.",
        )


class WonderboxCircularDependencyError(WonderboxError):
    """Signal that resolving a key re-entered the same key.

    Raised by ``resolve``/``try_resolve`` when cycle detection is enabled (the
    default) and a provider, directly or through other providers, depends on
    itself.

    Typical fixes include breaking the cycle with a lazily evaluated factory
    that is not resolved during construction, or restructuring the graph.
    """

    def __init__(self, chain: tuple[TypeKey, ...]) -> None:
        self.chain = chain
        rendered_chain = " -> ".join(key.name for key in chain)
        super().__init__(f"Circular dependency detected: {rendered_chain}")


class WonderboxGenerationError(WonderboxError):
    """Signal a misuse of ``resolve_dependencies``.

    Raised immediately when the decorator is applied to something that is not a
    class, and in strict mode for every generation diagnostic (zero or several
    eligible constructors, unsupported parameters, protocol or abstract targets).
    """

    def __init__(self, message: str, diagnostic: GenerationDiagnostic | None = None) -> None:
        self.diagnostic = diagnostic
        super().__init__(message)


class WonderboxGenerationWarning(UserWarning):
    """Report a non-strict ``resolve_dependencies`` diagnostic.

    The decorated class is left unchanged, so registering it with
    ``register_autoresolvable`` later fails with a registration error.
    """
