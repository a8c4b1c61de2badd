"""
Header multi-map.

A single ordered structure holds every value of every header name.
First-value (single) views are derived from it on demand, so the
single-value and multi-value representations can never diverge.
"""

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

# RFC 7230 token characters.
_TOKEN_CHARS = frozenset("!#$%&'*+-.^_`|~0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


def canonical_header_key(name: str) -> str:
    """
    Return the canonical form of a header name.

    The first letter and any letter following a hyphen are upper-cased,
    the rest lower-cased ("content-type" -> "Content-Type").
    Names containing non-token characters are returned unchanged.
    """
    if not name or any(ch not in _TOKEN_CHARS for ch in name):
        return name

    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


class Headers:
    """Ordered, case-insensitive header multi-map."""

    def __init__(self, initial: Optional[Iterable[Tuple[str, str]]] = None):
        self._values: Dict[str, List[str]] = {}
        if initial is not None:
            for name, value in initial:
                self.add(name, value)

    @classmethod
    def from_maps(
        cls,
        single: Optional[Mapping[str, str]] = None,
        multi: Optional[Mapping[str, List[str]]] = None,
    ) -> "Headers":
        """
        Build headers from API Gateway style single/multi-value maps.

        A name present in the multi-value map takes all of its values from
        there, in order, replacing the single-value entry.
        """
        headers = cls()
        for name, value in (single or {}).items():
            headers.set(name, value)
        for name, values in (multi or {}).items():
            if not values:
                continue
            headers.delete(name)
            for value in values:
                headers.add(name, value)
        return headers

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        values = self._values.get(canonical_header_key(name))
        if not values:
            return default
        return values[0]

    def get_all(self, name: str) -> List[str]:
        return list(self._values.get(canonical_header_key(name), []))

    def set(self, name: str, value: str) -> None:
        self._values[canonical_header_key(name)] = [value]

    def add(self, name: str, value: str) -> None:
        self._values.setdefault(canonical_header_key(name), []).append(value)

    def delete(self, name: str) -> None:
        self._values.pop(canonical_header_key(name), None)

    def items(self) -> List[Tuple[str, str]]:
        """(name, first value) pairs."""
        return [(name, values[0]) for name, values in self._values.items()]

    def multi_items(self) -> List[Tuple[str, str]]:
        """(name, value) pairs for every value, in insertion order."""
        return [(name, value) for name, values in self._values.items() for value in values]

    def to_single_dict(self) -> Dict[str, str]:
        return dict(self.items())

    def to_multi_dict(self) -> Dict[str, List[str]]:
        return {name: list(values) for name, values in self._values.items()}

    def copy(self) -> "Headers":
        clone = Headers()
        clone._values = self.to_multi_dict()
        return clone

    def __getitem__(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __setitem__(self, name: str, value: str) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        key = canonical_header_key(name)
        if key not in self._values:
            raise KeyError(name)
        del self._values[key]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_header_key(name) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Headers({self.multi_items()!r})"
