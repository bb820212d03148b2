"""Assemble manual pages and DocFX API metadata into a resolved build manifest.

Manual Markdown pages and generated ManagedReference YAML are merged under one
uid namespace, every cross-reference is resolved, and the result is written as
``manifest.json`` for the site renderer. Unresolved references are reported
but do not fail the build unless ``--fail-on-diagnostics`` is given.
"""

from __future__ import annotations

import argparse
import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from docxref.build_manifest import write_manifest
from docxref.compute_config_hash import compute_config_hash
from docxref.diagnostic_report import DiagnosticReport
from docxref.errors import ContentLoadError, RegistryCollisionError
from docxref.load_api_members import load_api_members
from docxref.load_config import load_config
from docxref.load_manual_pages import load_manual_pages
from docxref.load_xref_map import load_xref_maps
from docxref.page_paths import output_file_for_page
from docxref.site_assembly import run

if TYPE_CHECKING:
    from docxref.build_manifest import BuildManifest


def run_assembly(args: argparse.Namespace) -> int:
    """Execute the assembly and write its outputs."""
    if not args.docs_dir.is_dir():
        msg = f"Docs directory not found: {args.docs_dir}"
        raise SystemExit(msg)

    try:
        config = load_config(args.config)
        if args.api_root:
            config["site"]["api_root"] = args.api_root
        config["xref_maps"] = [*config.get("xref_maps", []), *args.xref_map]

        manual_pages = load_manual_pages(args.docs_dir)
        generated = load_api_members(args.api_dir) if args.api_dir else []
        external = load_xref_maps(config["xref_maps"])
    except ContentLoadError as exc:
        raise SystemExit(str(exc)) from exc

    print(
        f"Loaded {len(manual_pages)} manual pages, {len(generated)} API members, "
        f"{len(external)} external xrefs"
    )

    try:
        manifest = run(manual_pages, generated, config, external)
    except RegistryCollisionError as exc:
        msg = f"Build aborted: {exc}"
        raise SystemExit(msg) from exc

    out_root = args.out_dir.resolve()
    if args.clean and out_root.exists():
        print(f"Removing stale output: {out_root}")
        shutil.rmtree(out_root)
    out_root.mkdir(parents=True, exist_ok=True)

    config_hash = compute_config_hash(config)
    write_manifest(manifest, out_root / "manifest.json", config_hash)
    print(f"Wrote manifest for {len(manifest.units)} units into: {out_root}")

    if args.write_pages:
        written = _write_pages(manifest, out_root)
        print(f"Generated {written} Markdown pages into: {out_root}")

    report = DiagnosticReport(config_hash, manifest.reference_count)
    report.add_all(manifest.diagnostics)
    if args.report:
        report.generate_report(str(args.report))
        print(f"Diagnostic report written to {args.report}")

    _print_diagnostics(manifest)

    if args.fail_on_diagnostics and report.explicit_count():
        return 1
    return 0


def _write_pages(manifest: BuildManifest, out_root: Path) -> int:
    """Write the rewritten body of every unit that owns a page."""
    written = 0
    for unit in manifest.units:
        target = manifest.link_targets.get(unit.uid)
        if target is None or "#" in target.page_path:
            continue
        out_file = output_file_for_page(out_root, target.page_path)
        out_file.write_text(f"# {target.title}\n\n{unit.raw_body}", encoding="utf-8")
        written += 1
        if written % 50 == 0:
            print(f"  ... wrote {written}/{len(manifest.units)} pages")
    return written


def _print_diagnostics(manifest: BuildManifest) -> None:
    """Print one line per unresolved reference."""
    if not manifest.diagnostics:
        print("All references resolved.")
        return
    print(f"{len(manifest.diagnostics)} unresolved references:")
    for d in manifest.diagnostics:
        state = d.resolution_state
        detail = f" ({', '.join(state.candidates)})" if state.candidates else ""
        print(
            f"  {d.uid}@{d.location_offset}: {state.status} "
            f"{d.syntax_kind} '{d.target_token}'{detail}"
        )


def main() -> int:
    """Run the assembly process."""
    ap = argparse.ArgumentParser(
        description="Resolve cross-references across manual pages and API metadata.",
    )
    ap.add_argument(
        "docs_dir",
        type=Path,
        help="Directory containing hand-written Markdown pages",
    )
    ap.add_argument(
        "out_dir",
        type=Path,
        help="Output directory for manifest.json (and pages with --write-pages)",
    )
    ap.add_argument(
        "--api-dir",
        type=Path,
        help="Directory containing DocFX *.yml (ManagedReference) files",
    )
    ap.add_argument(
        "--xref-map",
        action="append",
        default=[],
        help="DocFX xrefmap.yml with external link targets (repeatable)",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--api-root",
        help="Site path root for generated API pages (default: /api)",
    )
    ap.add_argument(
        "--write-pages",
        action="store_true",
        help="Also write each rewritten page as Markdown under out_dir",
    )
    ap.add_argument(
        "--clean",
        action="store_true",
        help="Delete out_dir before writing",
    )
    ap.add_argument(
        "--report",
        type=Path,
        help="Write a JSON diagnostic summary to this path",
    )
    ap.add_argument(
        "--fail-on-diagnostics",
        action="store_true",
        help="Exit with status 1 when any explicit xref is unresolved",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Log registry and resolver details",
    )
    args = ap.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run_assembly(args)


if __name__ == "__main__":
    raise SystemExit(main())
