from wonderbox.capability import AutoResolvable
from wonderbox.codegen import GenerationDiagnostic, autoresolvable, resolve_dependencies
from wonderbox.container import Container
from wonderbox.exceptions import (
    WonderboxCircularDependencyError,
    WonderboxError,
    WonderboxGenerationError,
    WonderboxGenerationWarning,
    WonderboxInvalidRegistrationError,
    WonderboxProviderInferenceError,
    WonderboxRegistryCorruptionError,
)

__all__ = [
    "AutoResolvable",
    "Container",
    "GenerationDiagnostic",
    "WonderboxCircularDependencyError",
    "WonderboxError",
    "WonderboxGenerationError",
    "WonderboxGenerationWarning",
    "WonderboxInvalidRegistrationError",
    "WonderboxProviderInferenceError",
    "WonderboxRegistryCorruptionError",
    "autoresolvable",
    "resolve_dependencies",
]
