"""
Calculation Breakdown Report
randa_scoring/services/report_generator.py

Generates the markdown "show your work" breakdown for one evaluation:
per-standard points and formulas, the PP total, per-measure formulas, the
MSL total and the final rating, including the MSL constraint notice.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from randa_scoring.models.enumerations import label_text
from randa_scoring.scoring.evaluation_service import EvaluationReport

logger = logging.getLogger(__name__)

INCOMPLETE_MESSAGE = "Complete all steps to see detailed calculation breakdown."


def _num(value: Decimal) -> str:
    """Render without trailing zeros: 25 not 25.00, 131.25 as is."""
    return format(value.normalize(), "f")


def generate_breakdown_report(report: EvaluationReport) -> str:
    """Generate the markdown calculation breakdown, or a placeholder until all gates pass."""
    if not report.validation.ready or report.final is None:
        return INCOMPLETE_MESSAGE

    pp, msl, final = report.pp, report.msl, report.final
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")

    lines: List[str] = []
    lines.append("# Calculation Breakdown")
    lines.append("")
    lines.append(f"**Generated:** {now}")
    lines.append("")

    # ---- Professional Practices ----
    lines.append("## Professional Practices Calculation (70% of Final Score)")
    lines.append("")
    for std in pp.standards:
        ratio = f"{std.ratio:.4f}"
        lines.append(f"### {std.name}")
        lines.append("")
        lines.append(f"- Earned Points: {std.earned} / {std.possible}")
        lines.append(f"- Ratio: {std.earned} ÷ {std.possible} = {ratio}")
        lines.append(
            f"- Weighted Score (700-scale): {ratio} × ({_num(std.weight)}% ÷ 100) × 700 "
            f"= {std.weighted_score_700}"
        )
        lines.append(f"- Standard Rating: **{label_text(std.rating)}**")
        lines.append("")

    lines.append(f"**Total Professional Practices Score: {pp.score} / 700**  ")
    lines.append(f"Rating: **{label_text(pp.rating)}**")
    lines.append("")

    # ---- Measures of Student Learning ----
    lines.append("## Measures of Student Learning Calculation (30% of Final Score)")
    lines.append("")
    for idx, m in enumerate(msl.measures, start=1):
        lines.append(f"### Measure {idx}")
        lines.append("")
        lines.append(f"- Rating: {label_text(m.rating)} = {_num(m.value)} points")
        lines.append(
            f"- Weighted Score: ({_num(m.weight)}% ÷ 30%) × {_num(m.value)} × 100 "
            f"= {m.weighted_score_300}"
        )
        lines.append("")

    lines.append(f"**Total MSL Score: {msl.score} / 300**  ")
    lines.append(f"Rating: **{label_text(msl.rating)}**")
    lines.append("")

    # ---- Final ----
    lines.append("## Final Effectiveness Rating")
    lines.append("")
    lines.append(f"- Total Score: {pp.score} + {msl.score} = {final.total} / 1000")
    lines.append(f"- Percentage: {final.percentage}%")
    if final.msl_constraint_applied:
        lines.append(
            '- ⚠️ MSL Constraint Applied: Since MSL rating is "Less Than Expected", '
            'final rating is capped at "Effective"'
        )
    lines.append("")
    lines.append(f"**Final Effectiveness Rating: {label_text(final.rating)}**")
    if report.insight:
        lines.append("")
        lines.append(f"_{report.insight}_")
    lines.append("")

    content = "\n".join(lines)
    logger.info("Breakdown report generated (%d chars)", len(content))
    return content
