"""Response header map with exclusive claiming.

A Header is request-scoped. Components that must own a header (e.g. the
COOP interceptor) claim it once; the claim returns a setter that is the only
way to write that header for the rest of the response's lifetime.

Header names are case-insensitive. Values are kept as ordered lists so that
multi-valued headers can be emitted as repeated header lines.
"""

from __future__ import annotations

__all__ = [
    "Header",
    "HeaderSetter",
]

from collections.abc import Callable, Iterator, Mapping, Sequence

from coop_guard.exceptions import HeaderClaimError

HeaderSetter = Callable[[Sequence[str]], None]


def _key(name: str) -> str:
    return name.lower()


class Header:
    """Case-insensitive multi-valued header map with exclusive claims.

    Attributes are private; use the accessors. Not thread-safe, and never
    shared across requests.
    """

    def __init__(self, initial: Mapping[str, Sequence[str]] | None = None) -> None:
        # Insertion-ordered: key -> (display name, values)
        self._values: dict[str, tuple[str, list[str]]] = {}
        self._claimed: set[str] = set()
        for name, values in (initial or {}).items():
            self._values[_key(name)] = (name, list(values))

    # -------------------------------------------------------------------------
    # Claiming
    # -------------------------------------------------------------------------

    def claim(self, name: str) -> HeaderSetter:
        """Claim exclusive ownership of a header.

        Any value already present for the header is dropped. Passing an empty
        sequence to the returned setter suppresses the header entirely.

        Args:
            name: Header name (case-insensitive).

        Returns:
            Setter that replaces the header's values.

        Raises:
            HeaderClaimError: If the header was already claimed.
        """
        key = _key(name)
        if key in self._claimed:
            raise HeaderClaimError(name)
        self._claimed.add(key)
        self._values.pop(key, None)

        def setter(values: Sequence[str]) -> None:
            if values:
                self._values[key] = (name, list(values))
            else:
                self._values.pop(key, None)

        return setter

    def is_claimed(self, name: str) -> bool:
        """Return True if the header has been claimed."""
        return _key(name) in self._claimed

    def claimed(self) -> tuple[str, ...]:
        """Return the lowercased names of all claimed headers."""
        return tuple(sorted(self._claimed))

    def _check_unclaimed(self, name: str) -> str:
        key = _key(name)
        if key in self._claimed:
            raise HeaderClaimError(name, f"Header {name!r} is claimed and cannot be modified directly")
        return key

    # -------------------------------------------------------------------------
    # Unclaimed writes
    # -------------------------------------------------------------------------

    def set(self, name: str, value: str) -> None:
        """Replace the header's values with a single value.

        Raises:
            HeaderClaimError: If the header is claimed.
        """
        key = self._check_unclaimed(name)
        self._values[key] = (name, [value])

    def add(self, name: str, value: str) -> None:
        """Append a value to the header.

        Raises:
            HeaderClaimError: If the header is claimed.
        """
        key = self._check_unclaimed(name)
        if key in self._values:
            self._values[key][1].append(value)
        else:
            self._values[key] = (name, [value])

    def delete(self, name: str) -> None:
        """Remove the header.

        Raises:
            HeaderClaimError: If the header is claimed.
        """
        key = self._check_unclaimed(name)
        self._values.pop(key, None)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, name: str) -> str | None:
        """Return the first value of the header, or None if absent."""
        entry = self._values.get(_key(name))
        if entry is None or not entry[1]:
            return None
        return entry[1][0]

    def values(self, name: str) -> list[str]:
        """Return a copy of all values of the header (empty if absent)."""
        entry = self._values.get(_key(name))
        return list(entry[1]) if entry else []

    def items(self) -> Iterator[tuple[str, list[str]]]:
        """Yield (name, values) for every header that will be emitted."""
        for name, values in self._values.values():
            if values:
                yield name, list(values)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(self.values(name))

    def __repr__(self) -> str:
        return f"Header({dict(self.items())!r}, claimed={self.claimed()!r})"
