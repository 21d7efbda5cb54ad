"""
fhir-records Benchmark Runner

Runs the codec benchmarks and writes the results as JSON
(machine-readable) and a Markdown summary.

Usage:
    cd benchmarks
    python run_all.py
"""

from __future__ import annotations

import json
import os
import sys
import time
from dataclasses import asdict
from datetime import datetime, timezone

# Import fhir_records from the source tree
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "packages", "python", "src"))

import fhir_records
import bench_codec


def main() -> None:
    print("=" * 60)
    print("fhir-records Benchmark Suite")
    print(f"Date: {datetime.now(timezone.utc).isoformat()}")
    print("=" * 60)
    print()

    start = time.perf_counter()
    codec_results = bench_codec.run_all()
    total_sec = time.perf_counter() - start

    results = {
        "metadata": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "total_seconds": round(total_sec, 2),
            "fhir_records_version": fhir_records.__version__,
            "python_version": sys.version.split()[0],
        },
        "codec": asdict(codec_results),
    }

    out_dir = os.path.join(os.path.dirname(__file__), "results")
    os.makedirs(out_dir, exist_ok=True)

    json_path = os.path.join(out_dir, "benchmark_results.json")
    with open(json_path, "w") as f:
        json.dump(results, f, indent=2)
    print(f"\nJSON results saved to: {json_path}")

    md_path = os.path.join(out_dir, "benchmark_summary.md")
    with open(md_path, "w", encoding="utf-8") as f:
        f.write(_generate_markdown(results))
    print(f"Markdown summary saved to: {md_path}")

    print(f"\nTotal benchmark time: {total_sec:.1f}s")


def _generate_markdown(results: dict) -> str:
    meta = results["metadata"]
    codec = results["codec"]
    lines = [
        "# fhir-records Benchmark Results",
        "",
        f"**Date:** {meta['timestamp']}  ",
        f"**Version:** {meta['fhir_records_version']}  ",
        f"**Python:** {meta['python_version']}  ",
        "",
        "## Decode / encode throughput",
        "",
        "| Bundle entries | JSON bytes | Decode (ms) | Encode (ms) | Decode entries/s |",
        "|---|---|---|---|---|",
    ]
    for key, row in codec["throughput"].items():
        lines.append(
            f"| {key[2:]} | {row['json_bytes']:,} | "
            f"{row['decode']['mean_ms']:.2f} ± {row['decode']['std_ms']:.2f} | "
            f"{row['encode']['mean_ms']:.2f} ± {row['encode']['std_ms']:.2f} | "
            f"{row['decode_entries_per_sec']:,} |"
        )
    lines += [
        "",
        "## Entry isolation",
        "",
        "| Unknown-entry rate | Isolated entries | Decode (ms) |",
        "|---|---|---|",
    ]
    for key, row in codec["isolation"].items():
        lines.append(
            f"| {key[5:]} | {row['failed_entries']} | "
            f"{row['decode']['mean_ms']:.2f} ± {row['decode']['std_ms']:.2f} |"
        )
    fid = codec["fidelity"]
    lines += [
        "",
        "## Round-trip fidelity",
        "",
        f"{fid['lossless']}/{fid['bundles']} Bundles re-encoded losslessly, "
        f"{fid['stable']}/{fid['bundles']} decoded stably.",
        "",
    ]
    if codec["payload_sizes"]:
        lines += [
            "## Payload sizes",
            "",
            "| Entries | JSON | CBOR | gzip+JSON | gzip+CBOR |",
            "|---|---|---|---|---|",
        ]
        for key, row in codec["payload_sizes"].items():
            lines.append(
                f"| {key[2:]} | {row['json_bytes']:,} | {row['cbor_bytes']:,} | "
                f"{row['gzip_json_bytes']:,} | {row['gzip_cbor_bytes']:,} |"
            )
        lines.append("")
    return "\n".join(lines)


if __name__ == "__main__":
    main()
