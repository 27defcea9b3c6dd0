"""
Application-wide constants.
"""
from enum import Enum


class HepaticGrade(str, Enum):
    """Hepatotoxicity grades, most to least severe."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


class RenalGrade(str, Enum):
    """Nephrotoxicity grades, most to least severe."""
    N1 = "N1"
    N2 = "N2"
    N3 = "N3"
    N4 = "N4"
    N5 = "N5"


class HepaticStage(str, Enum):
    """Child-Pugh class of the patient."""
    NORMAL = "normal"
    A = "A"
    B = "B"
    C = "C"


class RenalStage(str, Enum):
    """CKD stage of the patient."""
    NORMAL = "normal"
    G2 = "G2"
    G3A = "G3a"
    G3B = "G3b"
    G4 = "G4"
    G5 = "G5"
    DIALYSIS = "dialysis"


class HepaticPattern(str, Enum):
    """Liver injury pattern."""
    HEPATOCELLULAR = "hepatocellular"
    CHOLESTATIC = "cholestatic"
    MIXED = "mixed"


class RenalPattern(str, Enum):
    """Kidney injury pattern."""
    ACUTE_TUBULAR_NECROSIS = "acute_tubular_necrosis"
    ACUTE_INTERSTITIAL = "acute_interstitial"
    GLOMERULAR = "glomerular"
    HEMODYNAMIC = "hemodynamic"
    OBSTRUCTIVE = "obstructive"
    MIXED = "mixed"


class AlertLevel(str, Enum):
    """Informational notice levels, most to least urgent."""
    INFO1 = "info1"
    INFO2 = "info2"
    INFO3 = "info3"
    INFO4 = "info4"


class AlertCategory(str, Enum):
    """Which organ axis a notice belongs to."""
    HEPATO = "hepato"
    RENAL = "renal"
    COMBINED = "combined"


class RiskLevel(str, Enum):
    """Per-drug risk level derived from the toxicity grade."""
    VERY_HIGH = "very_high"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"
    VERY_LOW = "very_low"
    UNKNOWN = "unknown"


class AlcoholHistory(str, Enum):
    """Alcohol history recorded with the session."""
    NONE = "none"
    SOCIAL = "social"
    CHRONIC = "chronic"


class Axis(str, Enum):
    """Toxicity axis; also the tab shown by the presentation layer."""
    HEPATO = "hepato"
    RENAL = "renal"


# Grade -> base score, identical on both axes
HEPATIC_GRADE_SCORES = {
    HepaticGrade.A: 100,
    HepaticGrade.B: 75,
    HepaticGrade.C: 50,
    HepaticGrade.D: 25,
    HepaticGrade.E: 10,
}

RENAL_GRADE_SCORES = {
    RenalGrade.N1: 100,
    RenalGrade.N2: 75,
    RenalGrade.N3: 50,
    RenalGrade.N4: 25,
    RenalGrade.N5: 10,
}

HEPATIC_STAGE_MULTIPLIERS = {
    HepaticStage.NORMAL: 0.5,
    HepaticStage.A: 1.0,
    HepaticStage.B: 1.5,
    HepaticStage.C: 2.0,
}

RENAL_STAGE_MULTIPLIERS = {
    RenalStage.NORMAL: 0.5,
    RenalStage.G2: 0.8,
    RenalStage.G3A: 1.0,
    RenalStage.G3B: 1.3,
    RenalStage.G4: 1.7,
    RenalStage.G5: 2.0,
    RenalStage.DIALYSIS: 2.5,
}

HEPATIC_GRADE_RISK = {
    HepaticGrade.A: RiskLevel.VERY_HIGH,
    HepaticGrade.B: RiskLevel.HIGH,
    HepaticGrade.C: RiskLevel.MODERATE,
    HepaticGrade.D: RiskLevel.LOW,
    HepaticGrade.E: RiskLevel.VERY_LOW,
}

RENAL_GRADE_RISK = {
    RenalGrade.N1: RiskLevel.VERY_HIGH,
    RenalGrade.N2: RiskLevel.HIGH,
    RenalGrade.N3: RiskLevel.MODERATE,
    RenalGrade.N4: RiskLevel.LOW,
    RenalGrade.N5: RiskLevel.VERY_LOW,
}

# Multi-drug penalty applied on top of the averaged score
PENALTY_MOST_SEVERE = 20
PENALTY_SECOND_SEVERE = 10
MAX_SCORE = 100

ALERT_LEVEL_ORDER = {
    AlertLevel.INFO1: 0,
    AlertLevel.INFO2: 1,
    AlertLevel.INFO3: 2,
    AlertLevel.INFO4: 3,
}

# Older rule exports used clinical level names
LEGACY_ALERT_LEVELS = {
    "critical": AlertLevel.INFO1,
    "high": AlertLevel.INFO2,
    "medium": AlertLevel.INFO3,
    "low": AlertLevel.INFO4,
}

# Rules that required every listed drug before requires_all_drugs existed
LEGACY_COMBINATION_RULE_IDS = frozenset({
    "meropenem_valproate",
    "cipro_theophylline",
    "cipro_tizanidine",
    "allopurinol_azathioprine",
})

# Substrings in dosing text that mean "contraindicated" / "avoid"
CONTRAINDICATION_MARKERS = ("contraindicated", "avoid", "금기", "회피")


class DosingText:
    """Fixed dosing guidance strings."""
    STANDARD_DOSE = "standard dose"
    NO_INFORMATION = "no information"
    HEPATIC_NORMAL = "Hepatic function normal - use standard recommended dose"
    HEPATIC_NORMAL_CAUTION = "Grade A/B medication - review reference information"
    RENAL_NORMAL = "Renal function normal - use standard recommended dose"
    RENAL_NORMAL_CAUTION = "Nephrotoxic medication - periodic Cr/eGFR monitoring recommended"
    RENAL_STAGE_CAUTION = "Use with caution at CKD {stage}"


class WarningText:
    """Per-drug warning strings, in the order they are emitted."""
    HEPATIC_GRADE_A = "Grade A medication - review reference information"
    HEPATIC_GRADE_B = "Grade B medication - review reference information"
    HEPATIC_AVOID = "Avoid use at Child-Pugh {stage}"
    CHOLESTATIC = "Cholestatic pattern - reduced biliary excretion in cirrhosis"
    RENAL_GRADE_N1 = "Well-known nephrotoxin - high nephrotoxicity risk"
    RENAL_GRADE_N2 = "Highly likely nephrotoxin - elevated nephrotoxicity risk"
    RENAL_AVOID = "Avoid use at CKD {stage}"
    HEMODYNAMIC = "Hemodynamic injury pattern - risk increases with hypotension/dehydration"
    TUBULAR_NECROSIS = "Acute tubular necrosis risk - watch dose and duration"
    NOT_DIALYZABLE = "Not removed by dialysis - watch for accumulation"
    DIALYZABLE = "Removed by dialysis - consider a supplemental dose after dialysis"


# Default Limits
class Limits:
    """Default limits for queries and operations."""
    DRUG_SEARCH_LIMIT = 20
    MAX_DRUG_SEARCH_LIMIT = 100


# Error Codes
class ErrorCodes:
    """Standard error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"
    DATASET_ERROR = "DATASET_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
