"""
FhirCodec: configured entry point for decoding and encoding FHIR R4 JSON.

A codec bundles a :class:`ResourceRegistry`, the strictness policy for
bound codes, and the resource limits applied to untrusted input.  Codecs
share no state; a strict and a lenient one can run side by side.
"""

from __future__ import annotations

import json
from typing import Any, Optional, TypeVar

from fhir_records.codec import DecodeContext, decode_resource, encode_resource
from fhir_records.limits import enforce_decode_limits, resolve_limits
from fhir_records.registry import ResourceRegistry, default_registry
from fhir_records.report import DecodeReport
from fhir_records.resource import Resource

R = TypeVar("R", bound=Resource)


class FhirCodec:
    """Decode and encode FHIR R4 resources.

    Args:
        registry:         Resource types available to polymorphic slots.
                          Defaults to a fresh :func:`default_registry`.
        strict:           Raise :class:`InvalidCodeError` for codes outside
                          a required value set instead of warning.
        limits:           Overrides for ``max_document_size`` and
                          ``max_depth``.
        report_unmodeled: Record an ``unmodeled-field`` warning for each
                          key kept in an extension bag.
    """

    def __init__(
        self,
        registry: Optional[ResourceRegistry] = None,
        *,
        strict: bool = False,
        limits: Optional[dict[str, int]] = None,
        report_unmodeled: bool = True,
    ):
        self.registry = registry if registry is not None else default_registry()
        self.strict = strict
        self.report_unmodeled = report_unmodeled
        self._limits = resolve_limits(limits)

    @property
    def limits(self) -> dict[str, int]:
        return dict(self._limits)

    def _context(self) -> DecodeContext:
        return DecodeContext(
            registry=self.registry,
            report=DecodeReport(),
            strict=self.strict,
            max_depth=self._limits["max_depth"],
            report_unmodeled=self.report_unmodeled,
        )

    # ── Decoding ─────────────────────────────────────────────────

    def decode(self, document: str | bytes | dict[str, Any]) -> tuple[Resource, DecodeReport]:
        """Decode *document* into the resource class its ``resourceType`` names.

        Returns:
            ``(resource, report)``.  The report holds warnings and any
            Bundle entries that failed in isolation.

        Raises:
            MalformedJSONError: Not JSON, or not a JSON object.
            LimitExceededError: Too large or too deeply nested.
            UnknownResourceTypeError: Missing or unregistered resourceType.
            FhirRecordsError: Any other structural error.
        """
        raw = enforce_decode_limits(document, self._limits)
        ctx = self._context()
        resource = decode_resource(raw, ctx)
        return resource, ctx.report

    def decode_as(self, cls: type[R], document: str | bytes | dict[str, Any]) -> tuple[R, DecodeReport]:
        """Decode *document* as resource class *cls*.

        ``resourceType`` must be present and equal ``cls.resource_type``.
        *cls* need not be registered.
        """
        if not isinstance(cls, type) or not issubclass(cls, Resource):
            raise TypeError(f"cls must be a Resource subclass, got: {cls!r}")
        raw = enforce_decode_limits(document, self._limits)
        ctx = self._context()
        resource = decode_resource(raw, ctx, expected=cls)
        return resource, ctx.report

    def loads(self, text: str | bytes) -> Resource:
        """Decode JSON text, discarding the report."""
        return self.decode(text)[0]

    # ── Encoding ─────────────────────────────────────────────────

    def encode(self, resource: Resource) -> dict[str, Any]:
        """Encode *resource* to a JSON-compatible dict."""
        return encode_resource(resource)

    def dumps(self, resource: Resource, *, indent: Optional[int] = None) -> str:
        """Encode *resource* to JSON text."""
        return _to_json(self.encode(resource), indent)

    def __repr__(self) -> str:
        return (
            f"FhirCodec(registry={self.registry!r}, strict={self.strict}, "
            f"limits={self._limits})"
        )


# ── Module-level helpers ─────────────────────────────────────────


def decode(document: str | bytes | dict[str, Any], *, strict: bool = False) -> tuple[Resource, DecodeReport]:
    """Decode with a default codec.  See :meth:`FhirCodec.decode`."""
    return FhirCodec(strict=strict).decode(document)


def loads(text: str | bytes, *, strict: bool = False) -> Resource:
    return FhirCodec(strict=strict).loads(text)


def encode(resource: Resource) -> dict[str, Any]:
    return encode_resource(resource)


def dumps(resource: Resource, *, indent: Optional[int] = None) -> str:
    return _to_json(encode_resource(resource), indent)


def _to_json(obj: dict[str, Any], indent: Optional[int]) -> str:
    return json.dumps(
        obj,
        indent=indent,
        ensure_ascii=False,
        allow_nan=False,
        separators=None if indent else (",", ":"),
    )
