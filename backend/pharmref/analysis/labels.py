"""Display labels for grades, stages and levels, so presentation never hardcodes them."""
from typing import Union

from pharmref.constants import (
    AlcoholHistory, AlertCategory, AlertLevel, HepaticGrade, HepaticPattern, HepaticStage,
    RenalGrade, RenalPattern, RenalStage, RiskLevel,
)


HEPATIC_GRADE_LABELS = {
    HepaticGrade.A: "Grade A (Well-known)",
    HepaticGrade.B: "Grade B (Highly likely)",
    HepaticGrade.C: "Grade C (Probable)",
    HepaticGrade.D: "Grade D (Possible)",
    HepaticGrade.E: "Grade E (Unlikely)",
}

HEPATIC_GRADE_DESCRIPTIONS = {
    HepaticGrade.A: "Well-known liver-related drug",
    HepaticGrade.B: "Liver involvement highly likely",
    HepaticGrade.C: "Liver involvement probable",
    HepaticGrade.D: "Liver involvement possible",
    HepaticGrade.E: "Liver involvement unlikely",
}

RENAL_GRADE_LABELS = {
    RenalGrade.N1: "Grade N1 (Well-known)",
    RenalGrade.N2: "Grade N2 (Highly likely)",
    RenalGrade.N3: "Grade N3 (Probable)",
    RenalGrade.N4: "Grade N4 (Possible)",
    RenalGrade.N5: "Grade N5 (Unlikely)",
}

RENAL_GRADE_DESCRIPTIONS = {
    RenalGrade.N1: "Well-known nephrotoxic drug",
    RenalGrade.N2: "Nephrotoxicity highly likely",
    RenalGrade.N3: "Nephrotoxicity probable",
    RenalGrade.N4: "Nephrotoxicity possible",
    RenalGrade.N5: "Nephrotoxicity unlikely",
}

RISK_LEVEL_LABELS = {
    RiskLevel.VERY_HIGH: "Very high",
    RiskLevel.HIGH: "High",
    RiskLevel.MODERATE: "Moderate",
    RiskLevel.LOW: "Low",
    RiskLevel.VERY_LOW: "Very low",
    RiskLevel.UNKNOWN: "No information",
}

HEPATIC_STAGE_LABELS = {
    HepaticStage.NORMAL: "Normal",
    HepaticStage.A: "Child-Pugh A",
    HepaticStage.B: "Child-Pugh B",
    HepaticStage.C: "Child-Pugh C",
}

RENAL_STAGE_LABELS = {
    RenalStage.NORMAL: "Normal (eGFR >=90)",
    RenalStage.G2: "CKD G2 (eGFR 60-89)",
    RenalStage.G3A: "CKD G3a (eGFR 45-59)",
    RenalStage.G3B: "CKD G3b (eGFR 30-44)",
    RenalStage.G4: "CKD G4 (eGFR 15-29)",
    RenalStage.G5: "CKD G5 (eGFR <15)",
    RenalStage.DIALYSIS: "On dialysis",
}

RENAL_STAGE_SHORT_LABELS = {
    RenalStage.NORMAL: "Normal",
    RenalStage.G2: "G2",
    RenalStage.G3A: "G3a",
    RenalStage.G3B: "G3b",
    RenalStage.G4: "G4",
    RenalStage.G5: "G5",
    RenalStage.DIALYSIS: "Dialysis",
}

HEPATIC_PATTERN_LABELS = {
    HepaticPattern.HEPATOCELLULAR: "Hepatocellular",
    HepaticPattern.CHOLESTATIC: "Cholestatic",
    HepaticPattern.MIXED: "Mixed",
}

RENAL_PATTERN_LABELS = {
    RenalPattern.ACUTE_TUBULAR_NECROSIS: "Acute tubular necrosis",
    RenalPattern.ACUTE_INTERSTITIAL: "Acute interstitial nephritis",
    RenalPattern.GLOMERULAR: "Glomerular injury",
    RenalPattern.HEMODYNAMIC: "Hemodynamic injury",
    RenalPattern.OBSTRUCTIVE: "Obstructive injury",
    RenalPattern.MIXED: "Mixed injury",
}

ALCOHOL_HISTORY_LABELS = {
    AlcoholHistory.NONE: "None",
    AlcoholHistory.SOCIAL: "Social drinking",
    AlcoholHistory.CHRONIC: "Chronic drinking",
}

ALERT_LEVEL_LABELS = {
    AlertLevel.INFO1: "Reference",
    AlertLevel.INFO2: "Reference",
    AlertLevel.INFO3: "Info",
    AlertLevel.INFO4: "Info",
}

ALERT_CATEGORY_TAGS = {
    AlertCategory.HEPATO: "[Liver]",
    AlertCategory.RENAL: "[Kidney]",
    AlertCategory.COMBINED: "[Combined]",
}

ICON_NAMES = {
    "alert-triangle": "AlertTriangle",
    "brain": "Brain",
    "pill": "Pill",
    "ban": "Ban",
    "block": "Ban",
    "activity": "Activity",
    "shield-alert": "ShieldAlert",
    "droplet": "Droplet",
    "alert-octagon": "AlertOctagon",
    "info": "Info",
    "warning": "AlertTriangle",
    "kidney": "Activity",
    "liver": "Activity",
    "gallbladder": "Droplet",
}
DEFAULT_ICON_NAME = "AlertCircle"


def get_grade_label(grade: Union[HepaticGrade, RenalGrade]) -> str:
    if grade in RENAL_GRADE_LABELS:
        return RENAL_GRADE_LABELS[RenalGrade(grade)]
    return HEPATIC_GRADE_LABELS[HepaticGrade(grade)]


def get_grade_description(grade: Union[HepaticGrade, RenalGrade]) -> str:
    if grade in RENAL_GRADE_DESCRIPTIONS:
        return RENAL_GRADE_DESCRIPTIONS[RenalGrade(grade)]
    return HEPATIC_GRADE_DESCRIPTIONS[HepaticGrade(grade)]


def get_risk_level_label(risk_level: RiskLevel) -> str:
    return RISK_LEVEL_LABELS[RiskLevel(risk_level)]


def get_hepatic_stage_label(stage: HepaticStage) -> str:
    return HEPATIC_STAGE_LABELS[HepaticStage(stage)]


def get_renal_stage_label(stage: RenalStage, short: bool = False) -> str:
    labels = RENAL_STAGE_SHORT_LABELS if short else RENAL_STAGE_LABELS
    return labels[RenalStage(stage)]


def get_pattern_label(pattern: str) -> str:
    """Label for a hepatic or renal injury pattern; unknown patterns pass through."""
    for labels in (RENAL_PATTERN_LABELS, HEPATIC_PATTERN_LABELS):
        for key, label in labels.items():
            if key.value == pattern:
                return label
    return pattern


def get_alcohol_history_label(history: AlcoholHistory) -> str:
    return ALCOHOL_HISTORY_LABELS[AlcoholHistory(history)]


def get_alert_level_label(level: AlertLevel) -> str:
    return ALERT_LEVEL_LABELS[AlertLevel(level)]


def get_alert_category_tag(category: AlertCategory) -> str:
    return ALERT_CATEGORY_TAGS[AlertCategory(category)]


def get_icon_name(icon: str) -> str:
    return ICON_NAMES.get(icon, DEFAULT_ICON_NAME)


def get_score_band(score: int) -> int:
    """Band 1-5 for a 0-100 score, in 20-point steps."""
    if score >= 80:
        return 5
    elif score >= 60:
        return 4
    elif score >= 40:
        return 3
    elif score >= 20:
        return 2
    return 1
