"""Variant selection value object.

A selection is the *set* of ``(name, value)`` pairs a buyer picked for a
product. Order and duplicates do not matter, and "no variants" has one
representation whether it arrives as ``None`` or ``[]``.
"""

import json

from protean.fields import Text

from shared.domain import storefront


@storefront.value_object
class VariantSelection:
    # Sorted pairs as compact JSON; None when nothing was selected
    canonical = Text()

    @classmethod
    def of(cls, options=None) -> "VariantSelection":
        pairs = set()
        for option in options or ():
            if isinstance(option, dict):
                pairs.add((str(option["name"]), str(option["value"])))
            else:
                pairs.add((str(option.name), str(option.value)))
        canonical = json.dumps(sorted(pairs), separators=(",", ":")) if pairs else None
        return cls(canonical=canonical)

    @classmethod
    def from_key(cls, key) -> "VariantSelection":
        if not key:
            return cls(canonical=None)
        return cls.of({"name": name, "value": value} for name, value in json.loads(key))

    @property
    def key(self) -> str:
        """Canonical string form, ``""`` when empty."""
        return self.canonical or ""

    @property
    def pairs(self) -> frozenset:
        if not self.canonical:
            return frozenset()
        return frozenset((name, value) for name, value in json.loads(self.canonical))

    def as_list(self) -> list[dict] | None:
        if not self.canonical:
            return None
        return [{"name": name, "value": value} for name, value in sorted(self.pairs)]

    def __bool__(self):
        return bool(self.canonical)
