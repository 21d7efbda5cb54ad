"""
Resource registry: ``resourceType`` string → resource class.

The registry is an ordinary object, not module state.  Build one with
:func:`default_registry` (all built-in resources) or start from an empty
:class:`ResourceRegistry` and register exactly what a caller needs.  Any
number of registries can coexist in one process, and nothing is
registered as an import side effect.

Registration order does not matter.  Registering a name that is already
present replaces the earlier class, which is how callers substitute a
profiled subclass for a built-in resource.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from fhir_records.codec import DecodeContext, decode_resource
from fhir_records.errors import UnknownResourceTypeError
from fhir_records.report import DecodeReport
from fhir_records.resource import Resource
from fhir_records.resources import BUILTIN_RESOURCES


class ResourceRegistry:
    """Mapping from FHIR resource type names to resource classes."""

    def __init__(self, factories: Optional[dict[str, type]] = None) -> None:
        self._factories: dict[str, type] = {}
        for name, factory in (factories or {}).items():
            self.register(name, factory)

    # ── Registration ──────────────────────────────────────────────

    def register(self, resource_type: str, factory: type) -> None:
        """Register *factory* as the class for *resource_type*.

        Raises:
            ValueError: If *resource_type* is empty or does not equal
                ``factory.resource_type``.
            TypeError: If *factory* is not a concrete Resource subclass.
        """
        if not isinstance(resource_type, str) or not resource_type.strip():
            raise ValueError(
                f"resource_type must be a non-empty string, got: {resource_type!r}"
            )
        if not isinstance(factory, type) or not issubclass(factory, Resource):
            raise TypeError(
                f"factory must be a Resource subclass, got: {factory!r}"
            )
        if factory.is_abstract():
            raise TypeError(f"Cannot register abstract {factory.resource_type}")
        if factory.resource_type != resource_type:
            raise ValueError(
                f"{factory.__name__}.resource_type is '{factory.resource_type}', "
                f"not '{resource_type}'"
            )
        self._factories[resource_type] = factory

    def unregister(self, resource_type: str) -> None:
        """Remove *resource_type*.

        Raises:
            KeyError: If it is not registered.
        """
        if resource_type not in self._factories:
            raise KeyError(f"Resource type not registered: {resource_type!r}")
        del self._factories[resource_type]

    # ── Lookup ────────────────────────────────────────────────────

    def get(self, resource_type: str) -> Optional[type]:
        return self._factories.get(resource_type)

    def peek(self, raw: dict[str, Any], *, path: Optional[str] = None) -> type:
        """Class registered for the ``resourceType`` of JSON object *raw*.

        Raises:
            UnknownResourceTypeError: If ``resourceType`` is missing, not
                a string, or not registered.
        """
        rt = raw.get("resourceType")
        if rt is None:
            raise UnknownResourceTypeError(None, path=path)
        if not isinstance(rt, str):
            raise UnknownResourceTypeError(repr(rt), path=path)
        factory = self._factories.get(rt)
        if factory is None:
            raise UnknownResourceTypeError(rt, path=path)
        return factory

    def names(self) -> list[str]:
        """Registered resource type names, sorted."""
        return sorted(self._factories)

    def copy(self) -> "ResourceRegistry":
        """Independent registry with the same entries."""
        return ResourceRegistry(dict(self._factories))

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"ResourceRegistry({len(self)} resource types)"

    # ── Decoding ──────────────────────────────────────────────────

    def decode_polymorphic(
        self,
        raw: dict[str, Any],
        *,
        strict: bool = False,
        report: Optional[DecodeReport] = None,
    ) -> Resource:
        """Decode JSON object *raw* into the class its ``resourceType`` names.

        Args:
            raw:    Parsed JSON object.
            strict: Raise :class:`InvalidCodeError` for unknown bound codes
                    instead of recording a warning.
            report: Optional report that collects warnings and isolated
                    Bundle entry errors.

        Raises:
            UnknownResourceTypeError: Missing or unregistered resourceType.
            FhirRecordsError: Any structural error in the resource.
        """
        ctx = DecodeContext(
            registry=self,
            report=report if report is not None else DecodeReport(),
            strict=strict,
        )
        return decode_resource(raw, ctx)


def default_registry() -> ResourceRegistry:
    """A new registry holding every built-in resource type."""
    return ResourceRegistry({cls.resource_type: cls for cls in BUILTIN_RESOURCES})
