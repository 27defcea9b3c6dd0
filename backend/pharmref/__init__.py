"""
PharmRef - drug organ-toxicity reference.

Given a selection of drugs and the patient's Child-Pugh class and CKD stage,
produces per-drug dosing guidance, aggregate liver and kidney scores, and
rule-based informational notices.
"""

from pharmref.analysis import analyze, get_hepatic_dosing, get_renal_dosing, detect_alerts
from pharmref.constants import AlertLevel, HepaticStage, RenalStage
from pharmref.schemas import AlertRule, AnalysisResult, Drug

__version__ = "1.0.0"

__all__ = [
    "analyze",
    "get_hepatic_dosing",
    "get_renal_dosing",
    "detect_alerts",
    "AlertLevel",
    "HepaticStage",
    "RenalStage",
    "AlertRule",
    "AnalysisResult",
    "Drug",
]
