"""Plain-text report of a session's analysis, for copying or saving."""
from datetime import datetime
from typing import List, Optional, Sequence

from pharmref.analysis.labels import (
    get_alcohol_history_label,
    get_alert_category_tag,
    get_alert_level_label,
    get_grade_label,
    get_hepatic_stage_label,
    get_pattern_label,
    get_renal_stage_label,
)
from pharmref.analysis.service import analyze
from pharmref.constants import DosingText, HepaticGrade, HepaticStage, RenalGrade, RenalStage
from pharmref.schemas import AlertRule
from pharmref.services.session import SessionState

RULE = "=" * 39

DISCLAIMER_LINES = (
    "  This information is for education and reference only",
    "  and carries no medical meaning.",
    "  Consult a qualified professional.",
)


def generate_text_report(
    state: SessionState,
    rules: Sequence[AlertRule],
    generated_at: Optional[datetime] = None,
) -> str:
    """Render the current selection, stages and analysis as plain text."""
    generated_at = generated_at or datetime.now()
    result = analyze(list(state.selected_drugs), state.hepatic_stage, state.renal_stage, rules)
    summary = result.summary

    lines: List[str] = [
        RULE,
        "        PharmRef Lookup Result",
        RULE,
        "",
        f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        "[ Query Conditions ]",
        f"- Liver function: {get_hepatic_stage_label(state.hepatic_stage)}",
        f"- Kidney function: {get_renal_stage_label(state.renal_stage)}",
        f"- Alcohol history: {get_alcohol_history_label(state.alcohol_history)}",
        "",
        "[ Liver Reference Score ]",
        f"- Score: {result.risk_score}/100",
        f"- Drugs reviewed: {summary.total_drugs}",
    ]
    for grade in HepaticGrade:
        count = getattr(summary, f"grade_{grade.value.lower()}_count")
        lines.append(f"  - Grade {grade.value}: {count}")

    lines.extend(["", "[ Kidney Reference Score ]", f"- Score: {result.renal_risk_score}/100"])
    for grade in RenalGrade:
        count = getattr(summary, f"grade_{grade.value.lower()}_count")
        lines.append(f"  - Grade {grade.value}: {count}")

    if result.alerts:
        lines.extend(["", "[ Reference Notices ]"])
        for alert in result.alerts:
            category = get_alert_category_tag(alert.alert_category)
            level = get_alert_level_label(alert.alert_level)
            lines.append(f"- {category} [{level}] {alert.title}")
            lines.append(f"  {alert.message}")

    lines.extend(["", "[ Per-Drug Information ]"])
    for analysis in result.drugs:
        drug = analysis.drug
        lines.append("")
        lines.append(f"> {drug.name_local} ({drug.name_en})")

        lines.append(f"  [Liver] {get_grade_label(drug.hepatotoxicity.grade)}")
        lines.append(f"    Pattern: {get_pattern_label(drug.hepatotoxicity.pattern.value)}")
        dosing = analysis.dosing
        if state.hepatic_stage != HepaticStage.NORMAL and dosing:
            lines.append(f"    Child-Pugh {state.hepatic_stage.value}: {dosing.dose}")
            if dosing.recommendation:
                lines.append(f"    Note: {dosing.recommendation}")
            if dosing.caution:
                lines.append(f"    Note: {dosing.caution}")

        if drug.nephrotoxicity:
            lines.append(f"  [Kidney] {get_grade_label(drug.nephrotoxicity.grade)}")
            lines.append(f"    Pattern: {get_pattern_label(drug.nephrotoxicity.pattern.value)}")
            renal = analysis.renal_dosing
            if state.renal_stage != RenalStage.NORMAL and renal:
                lines.append(f"    CKD {state.renal_stage.value}: {renal.dose}")
        else:
            lines.append(f"  [Kidney] {DosingText.NO_INFORMATION}")

    lines.extend(["", RULE, *DISCLAIMER_LINES, RULE])
    return "\n".join(lines)
