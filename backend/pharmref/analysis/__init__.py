"""
Toxicity Analysis Module

Pure, synchronous analysis of a drug selection against the patient's liver
and kidney status:
- Dosing guidance per Child-Pugh class and CKD stage
- Aggregate 0-100 risk score per axis and grade tallies
- Declarative alert rule evaluation with provenance
- Combined per-drug and aggregate analysis result
"""

from pharmref.analysis.alerts import AlertEngine, detect_alerts, matches_drug_class
from pharmref.analysis.dosing import get_hepatic_dosing, get_renal_dosing, resolve_dosing
from pharmref.analysis.scoring import grade_counts, score_axis
from pharmref.analysis.service import ToxicityAnalyzer, analyze, get_analyzer

__all__ = [
    "AlertEngine",
    "detect_alerts",
    "matches_drug_class",
    "get_hepatic_dosing",
    "get_renal_dosing",
    "resolve_dosing",
    "grade_counts",
    "score_axis",
    "ToxicityAnalyzer",
    "analyze",
    "get_analyzer",
]
