"""
Service module for the plain-text cycle report.

The report mirrors the exported summary: cycle statistics, recent periods,
frequent symptoms and, when known, the current phase with its partner tip.
"""
from typing import Optional
from datetime import date

from dalbit.models.prediction import CycleStatus
from dalbit.models.summary import CycleSummary
from dalbit.services.constants import FLOW_LABELS, SYMPTOM_ICONS, SYMPTOM_LABELS
from dalbit.services.utils import DateLike, parse_date

DISCLAIMER = (
    "This report is for reference only and does not replace a medical diagnosis. "
    "Please consult a healthcare professional."
)

def _days(value: Optional[int]) -> str:
    return f"{value} days" if value is not None else "-"

def generate_cycle_report(
    summary: CycleSummary,
    status: Optional[CycleStatus] = None,
    display_name: Optional[str] = None,
    today: Optional[DateLike] = None
) -> str:
    """
    Generate a formatted cycle report.

    Args:
        summary: Aggregate statistics from calculate_cycle_summary
        status: Current cycle position from analyze_cycle
        display_name: Name shown in the header
        today: Report date, defaults to the current date

    Returns:
        Formatted report string
    """
    report_date = parse_date(today) if today is not None else date.today()
    header = f"{display_name} · " if display_name else ""

    if summary.min_cycle_length is not None:
        cycle_range = f"{summary.min_cycle_length}-{summary.max_cycle_length} days"
    else:
        cycle_range = "-"

    report = [
        "🌙 Dalbit Cycle Report",
        f"{header}Generated: {report_date.isoformat()}",
        "",
        f"⚠️ {DISCLAIMER}",
        "",
        "📊 Cycle Statistics:",
        f"• Average cycle: {_days(summary.average_cycle_length)}",
        f"• Cycle range: {cycle_range}",
        f"• Recorded periods: {summary.total_periods}",
    ]

    if status and status.phase_info:
        report.extend([
            "",
            "🔄 Current Phase:",
            f"• Day {status.cycle_day}: {status.phase_info.label} ({status.phase_info.description})",
            f"• Partner tip: {status.phase_info.partner_tip}",
        ])
        if status.prediction:
            report.append(
                f"• Next period expected: {status.prediction.next_period_date.isoformat()} "
                f"({status.prediction.confidence.value} confidence)"
            )

    if summary.recent_periods:
        report.extend(["", "📅 Recent Periods:"])
        for row in summary.recent_periods:
            end = row.end_date.isoformat() if row.end_date else "-"
            line = (
                f"• {row.start_date.isoformat()} to {end} | "
                f"period {_days(row.period_length)} | cycle {_days(row.cycle_length)}"
            )
            if row.flow_intensity:
                line += f" | {FLOW_LABELS[row.flow_intensity]} flow"
            report.append(line)

    if summary.top_symptoms:
        report.extend(["", "🩺 Frequent Symptoms:"])
        for item in summary.top_symptoms:
            report.append(
                f"• {SYMPTOM_ICONS[item.symptom_type]} {SYMPTOM_LABELS[item.symptom_type]}: "
                f"{item.count} times, average severity {item.average_severity:.1f}/5"
            )

    return "\n".join(report)
