"""
Codec benchmarks.

Measures:
  - Decode / encode time for patient Bundles of increasing size
  - Cost of per-entry error isolation as the unknown-entry rate grows
  - Round-trip fidelity on the generated Bundles
  - Payload sizes: JSON vs CBOR vs gzip variants (if cbor2 is installed)
  All timings with stddev, 95% CI, and n=30 trials.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from fhir_records import FhirCodec, compare_round_trip

from bench_utils import DEFAULT_TRIALS, timed_trials
from data_generators import make_patient_bundle


@dataclass
class CodecResults:
    throughput: dict[str, Any] = field(default_factory=dict)
    isolation: dict[str, Any] = field(default_factory=dict)
    fidelity: dict[str, Any] = field(default_factory=dict)
    payload_sizes: dict[str, Any] = field(default_factory=dict)


def bench_throughput(
    sizes: tuple[int, ...] = (10, 100, 1000),
    n_trials: int = DEFAULT_TRIALS,
) -> dict[str, Any]:
    """Decode and encode time per Bundle size."""
    codec = FhirCodec()
    results = {}
    for n in sizes:
        text = json.dumps(make_patient_bundle(n))
        bundle, _ = codec.decode(text)
        dec = timed_trials(lambda: codec.decode(text), n=n_trials)
        enc = timed_trials(lambda: codec.dumps(bundle), n=n_trials)
        results[f"n={n}"] = {
            "json_bytes": len(text.encode("utf-8")),
            "decode": dec.to_dict(),
            "encode": enc.to_dict(),
            "decode_entries_per_sec": round(dec.per_second(n)),
            "encode_entries_per_sec": round(enc.per_second(n)),
        }
        print(f"  n={n:<5} decode {dec.ms()} ms   encode {enc.ms()} ms")
    return results


def bench_isolation(
    rates: tuple[float, ...] = (0.0, 0.05, 0.25),
    n_entries: int = 500,
    n_trials: int = DEFAULT_TRIALS,
) -> dict[str, Any]:
    """Decode time when a fraction of entries has an unregistered type."""
    codec = FhirCodec()
    results = {}
    for rate in rates:
        doc = make_patient_bundle(n_entries, unknown_rate=rate)
        _, report = codec.decode(doc)
        stats = timed_trials(lambda: codec.decode(doc), n=n_trials)
        results[f"rate={rate}"] = {
            "failed_entries": len(report.errors),
            "decode": stats.to_dict(),
        }
        print(f"  unknown rate {rate:.2f}: {len(report.errors):>4} isolated, decode {stats.ms()} ms")
    return results


def bench_fidelity(n_bundles: int = 20, n_entries: int = 200) -> dict[str, Any]:
    """Share of generated Bundles that re-encode to identical JSON."""
    equal = stable = 0
    differences: list[str] = []
    for _ in range(n_bundles):
        result = compare_round_trip(make_patient_bundle(n_entries, unknown_rate=0.05))
        equal += result.equal
        stable += result.stable
        differences.extend(result.differences[:3])
    print(f"  {equal}/{n_bundles} lossless, {stable}/{n_bundles} stable")
    return {
        "bundles": n_bundles,
        "lossless": equal,
        "stable": stable,
        "sample_differences": differences[:10],
    }


def bench_payload_sizes(sizes: tuple[int, ...] = (1, 10, 100, 1000)) -> dict[str, Any]:
    """Compare JSON, CBOR, gzip+JSON and gzip+CBOR for patient Bundles."""
    try:
        from fhir_records.cbor import payload_stats
        payload_stats(make_patient_bundle(1))
    except ImportError:
        print("  cbor2 not installed; skipped")
        return {}
    results = {}
    for n in sizes:
        stats = payload_stats(make_patient_bundle(n))
        results[f"n={n}"] = {
            "json_bytes": stats.json_bytes,
            "cbor_bytes": stats.cbor_bytes,
            "gzip_json_bytes": stats.gzip_json_bytes,
            "gzip_cbor_bytes": stats.gzip_cbor_bytes,
            "cbor_ratio": round(stats.cbor_ratio, 3),
            "gzip_cbor_ratio": round(stats.gzip_cbor_ratio, 3),
        }
        print(f"  n={n:<5} json {stats.json_bytes:>9,} B   cbor {stats.cbor_bytes:>9,} B"
              f"   gzip+cbor {stats.gzip_cbor_bytes:>8,} B")
    return results


def run_all() -> CodecResults:
    results = CodecResults()
    print("── Throughput ──")
    results.throughput = bench_throughput()
    print("── Entry isolation ──")
    results.isolation = bench_isolation()
    print("── Round-trip fidelity ──")
    results.fidelity = bench_fidelity()
    print("── Payload sizes ──")
    results.payload_sizes = bench_payload_sizes()
    return results


if __name__ == "__main__":
    run_all()
