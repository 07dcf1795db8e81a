from __future__ import annotations

from collections.abc import Iterator

from wonderbox._internal.providers import ProviderSpec
from wonderbox._internal.type_key import TypeKey


class ProvidersRegistry:
    """Store provider specs indexed by type key.

    Registration keys are unique: adding a spec for an existing key replaces the
    previous spec. Entries are independent of each other and no ordering across
    keys is observable.
    """

    def __init__(self) -> None:
        self._specs_by_key: dict[TypeKey, ProviderSpec] = {}

    def add(self, spec: ProviderSpec) -> ProviderSpec | None:
        """Add a provider specification, returning the one it replaced.

        Args:
            spec: Provider specification to register.

        """
        previous_spec = self._specs_by_key.get(spec.provides)
        self._specs_by_key[spec.provides] = spec
        return previous_spec

    def find(self, key: TypeKey) -> ProviderSpec | None:
        """Get a provider specification by key, if it exists.

        Args:
            key: Type key to look up.

        """
        return self._specs_by_key.get(key)

    def keys(self) -> Iterator[TypeKey]:
        return iter(self._specs_by_key)

    def __contains__(self, key: object) -> bool:
        return key in self._specs_by_key

    def __len__(self) -> int:
        return len(self._specs_by_key)
