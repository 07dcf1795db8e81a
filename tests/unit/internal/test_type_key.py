from __future__ import annotations

from typing import Annotated, Any, NewType, Protocol, runtime_checkable

import pytest

from wonderbox._internal.type_key import TypeKey
from wonderbox.exceptions import WonderboxInvalidRegistrationError


class _Service:
    pass


class _OtherService:
    pass


class _SubService(_Service):
    pass


class _Source(Protocol):
    def read(self) -> str: ...


@runtime_checkable
class _CheckedSource(Protocol):
    def read(self) -> str: ...


class _FileSource:
    def read(self) -> str:
        return "file"


_UserId = NewType("_UserId", int)
_PrimaryService = Annotated[_Service, "primary"]


def test_keys_of_same_dependency_are_equal_and_hash_equal() -> None:
    assert TypeKey.of(_Service) == TypeKey.of(_Service)
    assert hash(TypeKey.of(_Service)) == hash(TypeKey.of(_Service))


def test_structurally_identical_classes_have_distinct_keys() -> None:
    assert TypeKey.of(_Service) != TypeKey.of(_OtherService)


def test_aliases_and_new_types_are_distinct_from_underlying_class() -> None:
    assert TypeKey.of(_PrimaryService) != TypeKey.of(_Service)
    assert TypeKey.of(_UserId) != TypeKey.of(int)


@pytest.mark.parametrize("dependency", [None, type(None)])
def test_none_is_rejected_as_key(dependency: Any) -> None:
    with pytest.raises(WonderboxInvalidRegistrationError, match="None cannot be used"):
        TypeKey.of(dependency)


def test_unhashable_dependency_is_rejected() -> None:
    with pytest.raises(WonderboxInvalidRegistrationError, match="not hashable"):
        TypeKey.of([_Service])


def test_name_uses_class_qualname() -> None:
    assert TypeKey.of(_Service).name == "_Service"
    assert repr(TypeKey.of(_Service)) == "TypeKey(_Service)"


def test_name_falls_back_to_repr_for_typing_constructs() -> None:
    assert TypeKey.of(list[int]).name == repr(list[int])


@pytest.mark.parametrize(
    ("dependency", "expected"),
    [
        (_Service, _Service),
        (_PrimaryService, _Service),
        (_UserId, int),
        (list[int], list),
        (_CheckedSource, _CheckedSource),
        (_Source, None),
        (object, None),
        (Any, None),
        (int | str, None),
    ],
)
def test_runtime_class(dependency: Any, expected: type[Any] | None) -> None:
    assert TypeKey.of(dependency).runtime_class is expected


def test_accepts_instances_and_subclass_instances() -> None:
    key = TypeKey.of(_Service)

    assert key.accepts(_Service())
    assert key.accepts(_SubService())
    assert not key.accepts(_OtherService())


def test_accepts_structural_match_for_runtime_checkable_protocol() -> None:
    key = TypeKey.of(_CheckedSource)

    assert key.accepts(_FileSource())
    assert not key.accepts(_Service())


def test_accepts_anything_when_key_cannot_be_checked() -> None:
    assert TypeKey.of(_Source).accepts(_Service())
    assert TypeKey.of(object).accepts(1)
