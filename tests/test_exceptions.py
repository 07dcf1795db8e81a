"""Tests for custom exception hierarchy."""

from __future__ import annotations

import pytest

from wonderbox._internal.type_key import TypeKey
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


class Service:
    pass


class OtherService:
    pass


@pytest.mark.parametrize(
    "error_type",
    [
        WonderboxInvalidRegistrationError,
        WonderboxProviderInferenceError,
        WonderboxRegistryCorruptionError,
        WonderboxCircularDependencyError,
        WonderboxGenerationError,
    ],
)
def test_errors_share_base_class(error_type: type[Exception]) -> None:
    assert issubclass(error_type, WonderboxError)


def test_inference_error_is_a_registration_error() -> None:
    assert issubclass(WonderboxProviderInferenceError, WonderboxInvalidRegistrationError)


def test_generation_warning_is_a_user_warning() -> None:
    assert issubclass(WonderboxGenerationWarning, UserWarning)
    assert not issubclass(WonderboxGenerationWarning, WonderboxError)


class TestWonderboxRegistryCorruptionError:
    def test_message_names_key_and_value_type(self) -> None:
        error = WonderboxRegistryCorruptionError(TypeKey.of(Service), OtherService())

        assert error.key == TypeKey.of(Service)
        assert error.value_type is OtherService
        assert str(error) == (
            "Provider for Service produced a value of type OtherService; "
            "the registry is inconsistent."
        )

    def test_raised_when_factory_returns_wrong_type(self, container: Container) -> None:
        container.register_factory(lambda: OtherService(), provides=Service)

        with pytest.raises(WonderboxRegistryCorruptionError) as exc_info:
            container.resolve(Service)

        assert exc_info.value.value_type is OtherService


class TestWonderboxCircularDependencyError:
    def test_message_renders_chain(self) -> None:
        chain = (TypeKey.of(Service), TypeKey.of(OtherService), TypeKey.of(Service))

        error = WonderboxCircularDependencyError(chain)

        assert error.chain == chain
        assert str(error) == "Circular dependency detected: Service -> OtherService -> Service"


class TestWonderboxGenerationError:
    def test_diagnostic_defaults_to_none(self) -> None:
        assert WonderboxGenerationError("broken").diagnostic is None

    def test_catching_base_class(self, container: Container) -> None:
        with pytest.raises(WonderboxError):
            container.register_clone(None)
