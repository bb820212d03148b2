"""Main orchestration script for generating DocFX metadata and the site manifest."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Run the full documentation assembly pipeline."""
    parser = argparse.ArgumentParser(
        description="Generate DocFX metadata and assemble the cross-referenced site."
    )
    parser.add_argument(
        "--skip-metadata",
        action="store_true",
        help="Reuse existing API metadata instead of running 'dotnet docfx metadata'",
    )
    parser.add_argument(
        "--docs-dir",
        default="docs",
        help="Directory of hand-written pages (default: docs)",
    )
    parser.add_argument(
        "--api-dir",
        default="api",
        help="Directory DocFX writes metadata YAML to (default: api)",
    )
    parser.add_argument(
        "--out-dir",
        default="_site_manifest",
        help="Output directory (default: _site_manifest)",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when any explicit cross-reference is unresolved",
    )
    args = parser.parse_args()

    root_dir = Path(__file__).parent

    if not args.skip_metadata:
        print("--- Step 1: Generating DocFX metadata ---")
        # docfx looks for docfx.json in the working directory
        run_command(["dotnet", "docfx", "metadata"], cwd=root_dir)

    print("\n--- Step 2: Resolving cross-references ---")
    out_dir = root_dir / args.out_dir
    cmd = [
        sys.executable,
        "-m",
        "docxref.assemble_site",
        str(root_dir / args.docs_dir),
        str(out_dir),
        "--api-dir",
        str(root_dir / args.api_dir),
        "--write-pages",
        "--clean",
        "--report",
        str(out_dir.parent / "xref_report.json"),
    ]
    if args.strict:
        cmd.append("--fail-on-diagnostics")
    if args.config:
        cmd.extend(["--config", args.config])

    run_command(cmd, cwd=root_dir)

    print(f"\nSUCCESS: Site manifest generated in {out_dir}")


if __name__ == "__main__":
    main()
