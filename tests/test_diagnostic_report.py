"""Tests for the diagnostic summary report."""

import json
from pathlib import Path

from docxref.build_manifest import Diagnostic
from docxref.diagnostic_report import DiagnosticReport
from docxref.reference import CODE, XREF, XREF_TAG
from docxref.resolution_state import ResolutionState


def diagnostics() -> list[Diagnostic]:
    """Build a small mixed set of diagnostics."""
    return [
        Diagnostic("a", 0, "missing_target", ResolutionState.missing(), XREF),
        Diagnostic("a", 20, "Foo", ResolutionState.ambiguous(("A.Foo", "B.Foo")), XREF_TAG),
        Diagnostic("b", 3, "missing_target", ResolutionState.missing(), XREF),
        Diagnostic("b", 9, "X.Y", ResolutionState.missing(), CODE),
    ]


def test_compute_stats() -> None:
    """Verify diagnostics are counted by state, kind, unit and token."""
    report = DiagnosticReport("hash", total_references=8)
    report.add_all(diagnostics())
    stats = report.compute_stats()

    assert stats["state_counts"] == {"ambiguous": 1, "missing": 3}
    assert stats["syntax_kind_counts"] == {"code": 1, "xref": 2, "xref_tag": 1}
    assert stats["unit_counts"] == {"a": 2, "b": 2}
    assert stats["top_missing_tokens"] == [
        {"token": "missing_target", "count": 2},
        {"token": "X.Y", "count": 1},
    ]
    assert stats["metrics"]["explicit_diagnostics"] == 3
    assert stats["metrics"]["unresolved_rate"] == 0.5


def test_empty_report() -> None:
    """Verify an empty report has zero rates."""
    report = DiagnosticReport("hash")
    assert report.explicit_count() == 0
    assert report.compute_stats()["metrics"]["unresolved_rate"] == 0


def test_generate_report(tmp_path: Path) -> None:
    """Verify the report is written as JSON with meta and diagnostics."""
    report = DiagnosticReport("hash", total_references=4)
    for d in diagnostics()[:2]:
        report.add_diagnostic(d)
    path = tmp_path / "report.json"
    report.generate_report(str(path))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["meta"]["config_hash"] == "hash"
    assert data["meta"]["total_diagnostics"] == 2
    assert data["diagnostics"][1]["resolution_state"] == {
        "status": "ambiguous",
        "candidates": ["A.Foo", "B.Foo"],
    }
