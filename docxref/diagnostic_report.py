"""Logic for summarizing unresolved cross-references of a build."""

import json
import time
from collections import Counter
from pathlib import Path
from typing import Any

from docxref.build_manifest import Diagnostic
from docxref.reference import CODE
from docxref.resolution_state import MISSING

TOP_MISSING_LIMIT = 20


class DiagnosticReport:
    """Collects diagnostics and writes a summary for a reporting step."""

    def __init__(self, config_hash: str, total_references: int = 0) -> None:
        """Initialize the report with metadata."""
        self.config_hash = config_hash
        self.total_references = total_references
        self.diagnostics: list[Diagnostic] = []
        self.start_time = time.time()

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Add a single diagnostic to the report."""
        self.diagnostics.append(diagnostic)

    def add_all(self, diagnostics: list[Diagnostic]) -> None:
        """Add diagnostics in order."""
        self.diagnostics.extend(diagnostics)

    def explicit_count(self) -> int:
        """Count diagnostics for references written with explicit xref syntax."""
        return sum(1 for d in self.diagnostics if d.syntax_kind != CODE)

    def generate_report(self, path: str) -> None:
        """Write the summary report to a JSON file."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "total_diagnostics": len(self.diagnostics),
            },
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "stats": self.compute_stats(),
        }
        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")

    def compute_stats(self) -> dict[str, Any]:
        """Aggregate diagnostics by state, syntax kind, unit and token."""
        by_state = Counter(d.resolution_state.status for d in self.diagnostics)
        by_kind = Counter(d.syntax_kind for d in self.diagnostics)
        by_unit = Counter(d.uid for d in self.diagnostics)
        missing_tokens = Counter(
            d.target_token
            for d in self.diagnostics
            if d.resolution_state.status == MISSING
        )

        unresolved_rate = (
            len(self.diagnostics) / self.total_references
            if self.total_references > 0
            else 0
        )

        return {
            "state_counts": dict(sorted(by_state.items())),
            "syntax_kind_counts": dict(sorted(by_kind.items())),
            "unit_counts": dict(sorted(by_unit.items())),
            # Most frequent first, ties by token.
            "top_missing_tokens": [
                {"token": token, "count": count}
                for token, count in sorted(
                    missing_tokens.items(), key=lambda kv: (-kv[1], kv[0])
                )[:TOP_MISSING_LIMIT]
            ],
            "metrics": {
                "total_references": self.total_references,
                "explicit_diagnostics": self.explicit_count(),
                "unresolved_rate": unresolved_rate,
            },
        }
