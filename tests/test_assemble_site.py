"""Tests for the assemble_site command line entry point."""

import argparse
import json
from pathlib import Path

import pytest

from docxref.assemble_site import run_assembly


def make_args(docs_dir: Path, out_dir: Path, **overrides) -> argparse.Namespace:
    """Build CLI arguments with defaults matching the parser."""
    values = {
        "docs_dir": docs_dir,
        "out_dir": out_dir,
        "api_dir": None,
        "xref_map": [],
        "config": None,
        "api_root": None,
        "write_pages": False,
        "clean": False,
        "report": None,
        "fail_on_diagnostics": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.fixture
def docs(tmp_path: Path) -> Path:
    """Create a docs tree with one resolvable and one missing reference."""
    docs_dir = tmp_path / "docs"
    docs_dir.mkdir()
    (docs_dir / "index.md").write_text(
        "---\nuid: getting_started\n---\nSee xref:guides and xref:missing_target.\n",
        encoding="utf-8",
    )
    (docs_dir / "guides.md").write_text("# Guides\n\nHow-tos.\n", encoding="utf-8")
    return docs_dir


def test_run_assembly_writes_manifest(docs: Path, tmp_path: Path) -> None:
    """Verify the manifest is written and diagnostics do not fail the run."""
    out_dir = tmp_path / "out"
    assert run_assembly(make_args(docs, out_dir)) == 0

    manifest = json.loads((out_dir / "manifest.json").read_text(encoding="utf-8"))
    assert [u["uid"] for u in manifest["units"]] == ["guides", "getting_started"]
    assert manifest["units"][1]["raw_body"].startswith("See [Guides](/guides) and ")
    assert [d["target_token"] for d in manifest["diagnostics"]] == ["missing_target"]


def test_run_assembly_is_reproducible(docs: Path, tmp_path: Path) -> None:
    """Verify two runs write byte-identical manifests."""
    run_assembly(make_args(docs, tmp_path / "one"))
    run_assembly(make_args(docs, tmp_path / "two"))
    assert (tmp_path / "one" / "manifest.json").read_bytes() == (
        tmp_path / "two" / "manifest.json"
    ).read_bytes()


def test_fail_on_diagnostics(docs: Path, tmp_path: Path) -> None:
    """Verify unresolved explicit xrefs fail the run when requested."""
    args = make_args(docs, tmp_path / "out", fail_on_diagnostics=True)
    assert run_assembly(args) == 1


def test_write_pages_and_report(docs: Path, tmp_path: Path) -> None:
    """Verify pages and the diagnostic report are written on request."""
    out_dir = tmp_path / "out"
    report = tmp_path / "report.json"
    args = make_args(docs, out_dir, write_pages=True, report=report)
    run_assembly(args)

    page = (out_dir / "index.md").read_text(encoding="utf-8")
    assert page.startswith("# index\n\nSee [Guides](/guides)")
    assert (out_dir / "guides.md").exists()
    assert json.loads(report.read_text(encoding="utf-8"))["meta"]["total_diagnostics"] == 1


def test_clean_removes_stale_output(docs: Path, tmp_path: Path) -> None:
    """Verify --clean deletes files left by a previous build."""
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    (out_dir / "stale.md").write_text("old", encoding="utf-8")
    run_assembly(make_args(docs, out_dir, clean=True))
    assert not (out_dir / "stale.md").exists()
    assert (out_dir / "manifest.json").exists()


def test_duplicate_uid_aborts(docs: Path, tmp_path: Path) -> None:
    """Verify a uid collision exits with an error message."""
    (docs / "copy.md").write_text("---\nuid: guides\n---\nDup.\n", encoding="utf-8")
    with pytest.raises(SystemExit, match="Duplicate uid 'guides'"):
        run_assembly(make_args(docs, tmp_path / "out"))


def test_missing_docs_dir(tmp_path: Path) -> None:
    """Verify a missing docs directory exits with an error message."""
    with pytest.raises(SystemExit, match="Docs directory not found"):
        run_assembly(make_args(tmp_path / "nope", tmp_path / "out"))
