"""Runtime support imported by modules emitted from variants_struct_gen.

Generated records keep one attribute per variant. Variants that carry a value
are stored in a dict keyed by that value; the helpers here implement the
lookups and the mutable handles returned by ``get_mut``/``get_mut_unchecked``.
"""

from __future__ import annotations

from collections.abc import Hashable, MutableMapping
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

KEY_ABSENT_MESSAGE = "variant key not found in mapping"


class KeyAbsentError(AssertionError):
    """An unchecked accessor was used on a key that was never inserted.

    This is a caller bug, not a lookup miss: use ``get``/``get_mut`` to probe.
    """

    def __init__(self, variant: Any) -> None:
        super().__init__(f"{KEY_ABSENT_MESSAGE}: {variant!r}")
        self.variant = variant


class FieldRef(Generic[T]):
    __slots__ = ("_owner", "_name")

    def __init__(self, owner: Any, name: str) -> None:
        self._owner = owner
        self._name = name

    @property
    def value(self) -> T:
        return getattr(self._owner, self._name)

    @value.setter
    def value(self, new_value: T) -> None:
        setattr(self._owner, self._name, new_value)

    def __repr__(self) -> str:
        return f"FieldRef({self._name}={self.value!r})"


class EntryRef(Generic[T]):
    __slots__ = ("_mapping", "_key")

    def __init__(self, mapping: MutableMapping[Any, T], key: Hashable) -> None:
        self._mapping = mapping
        self._key = key

    @property
    def value(self) -> T:
        return self._mapping[self._key]

    @value.setter
    def value(self, new_value: T) -> None:
        self._mapping[self._key] = new_value

    def __repr__(self) -> str:
        return f"EntryRef({self._key!r}={self.value!r})"


Ref = Union[FieldRef[T], EntryRef[T]]


def lookup(mapping: MutableMapping[Any, T], key: Hashable, variant: Any) -> T:
    try:
        return mapping[key]
    except KeyError:
        raise KeyAbsentError(variant) from None


def entry(mapping: MutableMapping[Any, T], key: Hashable, variant: Any) -> EntryRef[T]:
    if key not in mapping:
        raise KeyAbsentError(variant)
    return EntryRef(mapping, key)


def find_entry(mapping: MutableMapping[Any, T], key: Hashable) -> EntryRef[T] | None:
    if key not in mapping:
        return None
    return EntryRef(mapping, key)


def not_a_variant(value: Any, union_name: str) -> TypeError:
    return TypeError(f"{value!r} is not a variant of {union_name}")
