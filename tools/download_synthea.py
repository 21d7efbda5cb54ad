#!/usr/bin/env python3
"""
Download Synthea FHIR R4 sample data and measure how fhir-records decodes it.

Downloads the pre-generated 1K patient sample from the Synthea project
and extracts it to ``data/synthea/fhir_r4/`` under the repository root.
The ``data/`` directory is git-ignored; this script is the reproducible
record of how the data was obtained.

Usage:
    python tools/download_synthea.py              # download + extract
    python tools/download_synthea.py --verify     # also decode and print stats
    python tools/download_synthea.py --stats-only # stats on existing data

Larger datasets can be generated locally with a pinned seed::

    git clone https://github.com/synthetichealth/synthea.git
    cd synthea
    ./run_synthea -s 12345 -p 1000 Florida

See: https://github.com/synthetichealth/synthea/wiki/Basic-Setup-and-Running

Data source
-----------
- URL: https://synthetichealth.github.io/synthea-sample-data/downloads/
       synthea_sample_data_fhir_r4_sep2019.zip
- License: Apache 2.0 (Synthea), data itself is CC0 / unrestricted
- Citation: Jason Walonoski et al., "Synthea: An Approach, Method, and
  Software Mechanism for Generating Synthetic Patients and the Synthetic
  Electronic Health Care Record", JAMIA 25(3), 2018.
"""

from __future__ import annotations

import argparse
import hashlib
import json
import sys
import urllib.request
import zipfile
from collections import Counter
from pathlib import Path

# ── Configuration ─────────────────────────────────────────────────

SAMPLE_URL = (
    "https://synthetichealth.github.io/synthea-sample-data/downloads/"
    "synthea_sample_data_fhir_r4_sep2019.zip"
)

# SHA-256 of the Sep 2019 zip; set to None to skip verification.
EXPECTED_SHA256: str | None = (
    "a6fc595d9c0f4c646746af42f861b5a12d03c856af158dd837c764dfb81b66f8"
)

REPO_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = REPO_ROOT / "data" / "synthea" / "fhir_r4"
ZIP_PATH = REPO_ROOT / "data" / "synthea" / "synthea_sample_fhir_r4.zip"


# ── Download ──────────────────────────────────────────────────────


def download(url: str, dest: Path, *, expected_sha256: str | None = None) -> None:
    """Download *url* to *dest* with optional SHA-256 verification."""
    dest.parent.mkdir(parents=True, exist_ok=True)

    if dest.exists():
        print(f"  zip already exists: {dest}")
        if expected_sha256 and _sha256(dest) != expected_sha256:
            print("  SHA-256 mismatch, downloading again")
            dest.unlink()
        else:
            return

    print(f"  downloading {url} ...")
    urllib.request.urlretrieve(url, dest, reporthook=_progress)
    print()  # newline after progress

    actual = _sha256(dest)
    print(f"  SHA-256: {actual}")

    if expected_sha256 and actual != expected_sha256:
        raise RuntimeError(
            f"SHA-256 mismatch!\n"
            f"  expected: {expected_sha256}\n"
            f"  actual:   {actual}"
        )


def _sha256(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1 << 20), b""):
            h.update(chunk)
    return h.hexdigest()


def _progress(block_num: int, block_size: int, total_size: int) -> None:
    downloaded = block_num * block_size
    if total_size > 0:
        pct = min(100, downloaded * 100 // total_size)
        mb = downloaded / (1 << 20)
        total_mb = total_size / (1 << 20)
        print(f"\r  {mb:.1f} / {total_mb:.1f} MB ({pct}%)", end="", flush=True)
    else:
        mb = downloaded / (1 << 20)
        print(f"\r  {mb:.1f} MB downloaded", end="", flush=True)


# ── Extract ───────────────────────────────────────────────────────


def extract(zip_path: Path, dest_dir: Path) -> int:
    """Extract patient bundle JSON files from *zip_path* into *dest_dir*.

    Returns the number of files extracted.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)

    existing = list(dest_dir.glob("*.json"))
    if existing:
        print(f"  {len(existing)} JSON files already in {dest_dir}")
        return len(existing)

    print(f"  extracting to {dest_dir} ...")
    count = 0
    with zipfile.ZipFile(zip_path, "r") as zf:
        for info in zf.infolist():
            if info.filename.endswith(".json") and not info.is_dir():
                # Flatten: strip directory prefixes, keep just the filename
                name = Path(info.filename).name
                target = dest_dir / name
                with zf.open(info) as src, open(target, "wb") as dst:
                    dst.write(src.read())
                count += 1

    print(f"  extracted {count} files")
    return count


# ── Decode statistics ─────────────────────────────────────────────


def compute_stats(data_dir: Path, *, strict: bool = False) -> dict:
    """Decode every Bundle in *data_dir* with a default :class:`FhirCodec`.

    Returns a dict with keys: total_bundles, total_entries,
    decoded_counts, failed_counts, warning_counts, rejected_bundles,
    lossless_bundles, decoded_ratio.
    """
    from fhir_records import FhirCodec, compare_round_trip
    from fhir_records.errors import FhirRecordsError

    json_files = sorted(data_dir.glob("*.json"))
    if not json_files:
        print(f"  no JSON files found in {data_dir}")
        return {}

    codec = FhirCodec(strict=strict, limits={"max_document_size": 200 * 1024 * 1024})
    total_bundles = total_entries = lossless = 0
    decoded: Counter[str] = Counter()
    failed: Counter[str] = Counter()
    warnings: Counter[str] = Counter()
    rejected: dict[str, str] = {}

    for fp in json_files:
        try:
            result = compare_round_trip(fp.read_bytes(), codec)
        except FhirRecordsError as exc:
            rejected[fp.name] = str(exc)
            continue
        bundle = result.encoded
        if bundle.get("resourceType") != "Bundle":
            continue

        total_bundles += 1
        lossless += result.equal
        entries = bundle.get("entry", [])
        total_entries += len(entries)
        failed_paths = {issue.path for issue in result.report.errors}
        for i, entry in enumerate(entries):
            rtype = entry.get("resource", {}).get("resourceType", "<missing>")
            if f"Bundle.entry[{i}].resource" in failed_paths:
                failed[rtype] += 1
            else:
                decoded[rtype] += 1
        warnings.update(result.report.codes())

    decoded_total = sum(decoded.values())
    return {
        "total_bundles": total_bundles,
        "total_entries": total_entries,
        "decoded_counts": dict(decoded.most_common()),
        "failed_counts": dict(failed.most_common()),
        "warning_counts": dict(warnings.most_common()),
        "rejected_bundles": rejected,
        "lossless_bundles": lossless,
        "decoded_ratio": decoded_total / total_entries if total_entries else 0.0,
    }


def print_stats(stats: dict) -> None:
    """Pretty-print decode statistics."""
    if not stats:
        return

    print(f"\n{'═' * 60}")
    print("  Synthea FHIR R4: fhir-records decode results")
    print(f"{'═' * 60}")
    print(f"  Bundles (patients):  {stats['total_bundles']:,}")
    print(f"  Lossless re-encode:  {stats['lossless_bundles']:,}")
    print(f"  Total entries:       {stats['total_entries']:,}")
    print(f"  Decoded entries:     {sum(stats['decoded_counts'].values()):,}"
          f"  ({stats['decoded_ratio']:.1%})")

    print(f"\n  ── Decoded ({len(stats['decoded_counts'])} types) ──")
    for rtype, count in stats["decoded_counts"].items():
        print(f"    {rtype:<30s} {count:>7,}")

    print(f"\n  ── Isolated as failed entries ({len(stats['failed_counts'])} types) ──")
    for rtype, count in stats["failed_counts"].items():
        print(f"    {rtype:<30s} {count:>7,}")

    print("\n  ── Warnings ──")
    for code, count in stats["warning_counts"].items():
        print(f"    {code:<30s} {count:>7,}")

    if stats["rejected_bundles"]:
        print(f"\n  ── Rejected files ({len(stats['rejected_bundles'])}) ──")
        for name, reason in list(stats["rejected_bundles"].items())[:20]:
            print(f"    {name}: {reason}")

    print(f"{'═' * 60}\n")


# ── CLI ───────────────────────────────────────────────────────────


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Download Synthea FHIR R4 sample data and decode it with fhir-records."
    )
    parser.add_argument(
        "--verify", action="store_true",
        help="Decode every Bundle and print statistics after download.",
    )
    parser.add_argument(
        "--stats-only", action="store_true",
        help="Skip download; decode the existing data.",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Treat codes outside their value set as entry failures.",
    )
    parser.add_argument(
        "--json", metavar="PATH", type=Path,
        help="Also write the statistics to PATH as JSON.",
    )
    args = parser.parse_args()

    if not args.stats_only:
        print("Step 1/2: Download")
        download(SAMPLE_URL, ZIP_PATH, expected_sha256=EXPECTED_SHA256)

        print("\nStep 2/2: Extract")
        extract(ZIP_PATH, DATA_DIR)
    elif not DATA_DIR.exists():
        print(f"  data directory not found: {DATA_DIR}")
        print("  run without --stats-only first to download.")
        sys.exit(1)

    if args.stats_only or args.verify:
        print("\nDecoding bundles ...")
        stats = compute_stats(DATA_DIR, strict=args.strict)
        print_stats(stats)
        if args.json:
            args.json.write_text(json.dumps(stats, indent=2), encoding="utf-8")
            print(f"Statistics written to {args.json}")

    print("Data is in:", DATA_DIR)


if __name__ == "__main__":
    main()
