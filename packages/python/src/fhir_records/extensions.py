"""
Open-world preservation of content the model does not declare.

FHIR requires that data a receiver does not understand survives a
decode → encode cycle.  Two mechanisms cover it:

- Typed ``extension`` / ``modifierExtension`` lists on every element,
  decoded as :class:`~fhir_records.elements.Extension` whatever their
  ``url``.
- The *extension bag*: every JSON key of an object that matches no
  declared field is captured verbatim by :func:`capture` and merged
  back by :func:`reemit`.
"""

from __future__ import annotations

import copy
from typing import Any, Iterable, Mapping


def capture(raw: Mapping[str, Any], known_field_names: Iterable[str]) -> dict[str, Any]:
    """Return the entries of *raw* whose key is not in *known_field_names*.

    Values are deep-copied so the bag never aliases caller data.  Never
    fails: anything unrecognised is data.
    """
    known = known_field_names if isinstance(known_field_names, (set, frozenset)) else set(known_field_names)
    return {k: copy.deepcopy(v) for k, v in raw.items() if k not in known}


def reemit(known_fields: dict[str, Any], captured: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *captured* into *known_fields* and return it.

    Declared fields win if a captured key collides with one of them.
    """
    for key, value in captured.items():
        if key not in known_fields:
            known_fields[key] = copy.deepcopy(value)
    return known_fields


def extensions_with_url(element: Any, url: str, *, modifier: bool = False) -> list[Any]:
    """Extensions on *element* (or its modifierExtension list) with *url*."""
    exts = getattr(element, "modifier_extension" if modifier else "extension", None) or []
    return [e for e in exts if e.url == url]


def unknown_modifier_urls(element: Any, understood: Iterable[str]) -> list[str]:
    """``modifierExtension`` URLs on *element* that are not in *understood*.

    A consumer that gets a non-empty result must not process the element
    as if it understood it; that decision is left to the caller.
    """
    known = set(understood)
    exts = getattr(element, "modifier_extension", None) or []
    return [e.url for e in exts if e.url not in known]
