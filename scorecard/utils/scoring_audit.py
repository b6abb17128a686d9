"""
Scoring Audit Trail - Captures how degenerate inputs were resolved.

The scorers never raise on incomplete business data; a missing target, an
empty entry list or an unknown formula name all resolve to a defined number.
This module records those resolutions so the host can surface them as
data-quality signals:
- Which indicator/goal was affected
- Which rule produced the fallback value
- Whether the case is routine (INFO) or worth fixing upstream (WARNING)

An audit log is owned by whoever creates it and is passed to scorers
explicitly; there is no process-wide instance.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class AuditSeverity(Enum):
    """How much attention an audit entry deserves."""

    INFO = "info"  # Expected edge case (e.g. no entries submitted yet)
    WARNING = "warning"  # Likely a data-quality problem upstream


@dataclass
class ScoringAuditEntry:
    """A single record of a scoring decision on degenerate input."""

    subject_id: str
    scorer: str
    component: str  # e.g. "no_target", "fallback_method", "weights_over_budget"
    severity: AuditSeverity
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "subject_id": self.subject_id,
            "scorer": self.scorer,
            "component": self.component,
            "severity": self.severity.value,
            "message": self.message,
            "details": {k: self._serialize_value(v) for k, v in self.details.items()},
            "timestamp": self.timestamp.isoformat(),
        }

    def _serialize_value(self, value: Any) -> Any:
        if value is None or isinstance(value, (str, int, float, bool)):
            return value
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (list, tuple)):
            return [self._serialize_value(v) for v in value]
        if isinstance(value, dict):
            return {k: self._serialize_value(v) for k, v in value.items()}
        return str(value)


class ScoringAuditLog:
    """Collects audit entries during one scoring pass.

    Usage:
        audit_log = ScoringAuditLog()
        scorer = IndicatorScorer(audit_log=audit_log)
        scorer.score(indicator, entries)

        for entry in audit_log.get_warnings():
            print(entry.message)

        audit_log.export_to_json("/tmp/scoring_audit.json")
    """

    def __init__(self):
        self._entries: list[ScoringAuditEntry] = []

    def record(
        self,
        subject_id: str,
        scorer: str,
        component: str,
        message: str,
        severity: AuditSeverity = AuditSeverity.INFO,
        **details: Any,
    ) -> ScoringAuditEntry:
        """Record a scoring decision.

        Args:
            subject_id: Indicator or goal identifier the decision applies to
            scorer: Name of the scorer class (e.g. "IndicatorScorer")
            component: Short machine tag for the rule that fired
            message: Human-readable description
            severity: INFO for routine edge cases, WARNING for data-quality problems
            **details: Structured values that explain the decision

        Returns:
            The created audit entry
        """
        entry = ScoringAuditEntry(
            subject_id=subject_id,
            scorer=scorer,
            component=component,
            severity=severity,
            message=message,
            details=details,
        )
        self._entries.append(entry)
        if severity == AuditSeverity.WARNING:
            logger.warning(f"AUDIT WARNING: {scorer} {subject_id}: {message}")
        return entry

    def get_warnings(self) -> list[ScoringAuditEntry]:
        """Get entries that point to a data-quality problem."""
        return [e for e in self._entries if e.severity == AuditSeverity.WARNING]

    def get_all_entries(self) -> list[ScoringAuditEntry]:
        return self._entries.copy()

    def get_entries_for(self, subject_id: str) -> list[ScoringAuditEntry]:
        return [e for e in self._entries if e.subject_id == subject_id]

    def get_summary(self) -> dict:
        """Count entries per component and severity.

        Returns:
            Dictionary with totals and per-component counts
        """
        by_component: dict[str, int] = {}
        for entry in self._entries:
            by_component[entry.component] = by_component.get(entry.component, 0) + 1
        return {
            "total_entries": len(self._entries),
            "warnings_count": len(self.get_warnings()),
            "by_component": by_component,
        }

    def export_to_json(self, filepath: str | Path) -> None:
        """Export audit log to JSON file.

        Args:
            filepath: Path to output JSON file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "generated_at": datetime.now().isoformat(),
            **self.get_summary(),
            "entries": [e.to_dict() for e in self._entries],
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported {len(self._entries)} audit entries to {filepath}")

    def clear(self) -> None:
        """Clear all entries (for reuse between scoring passes)."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def record_if(
    audit_log: Optional[ScoringAuditLog],
    subject_id: str,
    scorer: str,
    component: str,
    message: str,
    severity: AuditSeverity = AuditSeverity.INFO,
    **details: Any,
) -> None:
    """Record into audit_log when one was provided."""
    if audit_log is not None:
        audit_log.record(subject_id, scorer, component, message, severity, **details)
