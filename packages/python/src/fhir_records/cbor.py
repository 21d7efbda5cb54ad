"""
CBOR transport for FHIR resources.

Carries the encoded FHIR JSON object as CBOR (RFC 8949).  Well-known
terminology system URIs in ``system`` keys are replaced by small
integers, which is where most of the repetition in clinical payloads
lives.

Requires the ``cbor2`` package::

    pip install fhir-records[cbor]
"""

from __future__ import annotations

import gzip
import json
from dataclasses import dataclass
from typing import Any, Optional

try:
    import cbor2

    _HAS_CBOR2 = True
except ImportError:
    _HAS_CBOR2 = False

from fhir_records.codec import encode_resource
from fhir_records.processor import FhirCodec
from fhir_records.resource import Resource


def _require_cbor2() -> None:
    if not _HAS_CBOR2:
        raise ImportError(
            "cbor2 is required for CBOR transport. "
            "Install it with: pip install fhir-records[cbor]"
        )


# ── Default system registry ───────────────────────────────────────

# Maps terminology system URIs to compact integer IDs.
DEFAULT_SYSTEM_REGISTRY: dict[str, int] = {
    "http://loinc.org": 1,
    "http://snomed.info/sct": 2,
    "http://www.nlm.nih.gov/research/umls/rxnorm": 3,
    "http://hl7.org/fhir/sid/icd-10": 4,
    "http://hl7.org/fhir/sid/cvx": 5,
    "http://unitsofmeasure.org": 6,
    "http://terminology.hl7.org/CodeSystem/observation-category": 7,
    "http://terminology.hl7.org/CodeSystem/condition-clinical": 8,
    "http://terminology.hl7.org/CodeSystem/condition-ver-status": 9,
    "urn:ietf:rfc:3986": 10,
}


# ── Data Structures ────────────────────────────────────────────────


@dataclass
class PayloadStats:
    """Comparison of serialization sizes for a resource."""

    json_bytes: int
    cbor_bytes: int
    gzip_json_bytes: int
    gzip_cbor_bytes: int

    @property
    def cbor_ratio(self) -> float:
        """CBOR size as a fraction of JSON size (lower = better)."""
        if self.json_bytes == 0:
            return 0.0
        return self.cbor_bytes / self.json_bytes

    @property
    def gzip_cbor_ratio(self) -> float:
        if self.json_bytes == 0:
            return 0.0
        return self.gzip_cbor_bytes / self.json_bytes


# ═══════════════════════════════════════════════════════════════════
# SERIALIZATION
# ═══════════════════════════════════════════════════════════════════


def to_cbor(
    resource: Resource | dict[str, Any],
    system_registry: Optional[dict[str, int]] = None,
) -> bytes:
    """Serialize a resource (or its encoded JSON object) to CBOR.

    Args:
        resource: Resource instance, or a JSON object already encoded.
        system_registry: Mapping of system URI → integer ID.
            Defaults to :data:`DEFAULT_SYSTEM_REGISTRY`.

    Raises:
        ImportError: If ``cbor2`` is not installed.
    """
    _require_cbor2()
    doc = resource if isinstance(resource, dict) else encode_resource(resource)
    registry = system_registry or DEFAULT_SYSTEM_REGISTRY
    return cbor2.dumps(_compress_systems(doc, registry))


def from_cbor(
    data: bytes,
    codec: Optional[FhirCodec] = None,
    system_registry: Optional[dict[str, int]] = None,
) -> Resource:
    """Decode CBOR bytes produced by :func:`to_cbor` into a resource.

    The restored JSON object goes through *codec* (default: a fresh
    :class:`FhirCodec`) with its usual limits and checks.

    Raises:
        ImportError: If ``cbor2`` is not installed.
    """
    _require_cbor2()
    registry = system_registry or DEFAULT_SYSTEM_REGISTRY
    reverse = {v: k for k, v in registry.items()}
    doc = _decompress_systems(cbor2.loads(data), reverse)
    codec = codec or FhirCodec()
    return codec.decode(doc)[0]


# ═══════════════════════════════════════════════════════════════════
# PAYLOAD STATISTICS
# ═══════════════════════════════════════════════════════════════════


def payload_stats(
    resource: Resource | dict[str, Any],
    system_registry: Optional[dict[str, int]] = None,
) -> PayloadStats:
    """Compare JSON, CBOR and gzipped sizes for *resource*."""
    _require_cbor2()
    doc = resource if isinstance(resource, dict) else encode_resource(resource)
    json_bytes = json.dumps(doc, separators=(",", ":")).encode("utf-8")
    cbor_bytes = to_cbor(doc, system_registry)
    return PayloadStats(
        json_bytes=len(json_bytes),
        cbor_bytes=len(cbor_bytes),
        gzip_json_bytes=len(gzip.compress(json_bytes)),
        gzip_cbor_bytes=len(gzip.compress(cbor_bytes)),
    )


# ═══════════════════════════════════════════════════════════════════
# INTERNAL HELPERS
# ═══════════════════════════════════════════════════════════════════


def _compress_systems(obj: Any, registry: dict[str, int]) -> Any:
    """Recursively replace known ``system`` URIs with registry IDs."""
    if isinstance(obj, dict):
        return {
            k: registry.get(v, v) if k == "system" and isinstance(v, str)
            else _compress_systems(v, registry)
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_compress_systems(item, registry) for item in obj]
    return obj


def _decompress_systems(obj: Any, reverse: dict[int, str]) -> Any:
    if isinstance(obj, dict):
        return {
            k: reverse.get(v, v) if k == "system" and isinstance(v, int) and not isinstance(v, bool)
            else _decompress_systems(v, reverse)
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_decompress_systems(item, reverse) for item in obj]
    return obj
