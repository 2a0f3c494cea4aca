"""
Dashboard and report helpers
Bucket counts and a plain-text report over the analysis history
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from phishguard.core.blender import RiskLabel, label_for_score
from phishguard.services.analysis_record import Analysis

REPORT_TITLE = "PhishGuard - Offline Analysis Report"


@dataclass(frozen=True)
class RiskSummary:
    """Counts of analyses per risk label"""
    low: int = 0
    medium: int = 0
    high: int = 0

    @property
    def total(self) -> int:
        return self.low + self.medium + self.high

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total"] = self.total
        return data


def summarize(history: Iterable[Analysis]) -> RiskSummary:
    """Count analyses per label using the same thresholds as the scorer"""
    counts = {label: 0 for label in RiskLabel}
    for entry in history:
        counts[label_for_score(entry.score)] += 1
    return RiskSummary(
        low=counts[RiskLabel.LOW],
        medium=counts[RiskLabel.MEDIUM],
        high=counts[RiskLabel.HIGH],
    )


def render_text_report(history: Sequence[Analysis], generated_at: Optional[datetime] = None) -> str:
    """Plain-text report with one numbered block per analysis"""
    generated_at = generated_at or datetime.now()
    summary = summarize(history)

    lines = [
        REPORT_TITLE,
        f"Report generated on: {generated_at.isoformat(timespec='seconds')}",
        f"Total analyses: {summary.total} (Low: {summary.low}, Medium: {summary.medium}, High: {summary.high})",
        "",
    ]
    for i, entry in enumerate(history, start=1):
        lines.append(f"{i}. Risk Level: {entry.label} ({entry.score}%)")
        lines.append(f"   Analyzed on: {entry.time}")
        lines.append(f"   Reasoning: {entry.explanation or 'N/A'}")
        lines.append(f"   Content: {entry.text}")
        lines.append("")
    return "\n".join(lines)
