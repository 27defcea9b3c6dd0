"""
Alert Rules Engine.

Evaluates declarative notice rules against the current selection and
patient stages. Each rule is a conjunction of optional predicates, checked
in a fixed order:

1. required drugs (ALL when requires_all_drugs, otherwise ANY)
2. required Child-Pugh classes
3. minimum number of grade A drugs
4. minimum number of grade N1 drugs
5. required CKD stages
6. required drug-class substrings

A rule with no predicates triggers for any non-empty selection.
"""
from typing import List, Optional, Sequence, Tuple
import logging

from pharmref.constants import (
    HepaticGrade, HepaticStage, RenalGrade, RenalStage, ALERT_LEVEL_ORDER,
)
from pharmref.schemas import AlertRule, Drug, TriggeredAlert

logger = logging.getLogger(__name__)


def matches_drug_class(drug: Drug, class_name: str) -> bool:
    """
    Substring match of a rule class string against a drug.

    Case-insensitive on the drug class and English name, exact on the
    local-language name.
    """
    needle = class_name.lower()
    return (
        needle in drug.drug_class.lower()
        or needle in drug.name_en.lower()
        or class_name in drug.name_local
    )


class AlertEngine:
    """Rule engine for contextual drug notices."""

    def evaluate(
        self,
        drugs: Sequence[Drug],
        hepatic_stage: HepaticStage,
        renal_stage: RenalStage,
        rules: Sequence[AlertRule],
    ) -> List[TriggeredAlert]:
        """
        Evaluate every rule and return the triggered ones.

        Args:
            drugs: Current selection, in insertion order
            hepatic_stage: Child-Pugh class
            renal_stage: CKD stage
            rules: Rule catalog; its order breaks severity ties

        Returns:
            Triggered alerts sorted by level, most urgent first
        """
        if not drugs:
            return []

        triggered: List[TriggeredAlert] = []
        for rule in rules:
            fired, triggered_by = self._check_rule(rule, drugs, hepatic_stage, renal_stage)
            if fired:
                triggered.append(
                    TriggeredAlert(**rule.model_dump(), triggered_by=triggered_by)
                )

        logger.debug(f"{len(triggered)}/{len(rules)} alert rules triggered for {len(drugs)} drugs")
        return sorted(triggered, key=lambda alert: ALERT_LEVEL_ORDER[alert.alert_level])

    def _check_rule(
        self,
        rule: AlertRule,
        drugs: Sequence[Drug],
        hepatic_stage: HepaticStage,
        renal_stage: RenalStage,
    ) -> Tuple[bool, List[str]]:
        """Return (triggered, triggered_by) for one rule."""
        not_triggered: Tuple[bool, List[str]] = (False, [])
        triggered_by: List[str] = []

        if rule.required_drugs:
            present = self._present_drug_ids(rule, drugs)
            if present is None:
                return not_triggered
            triggered_by.extend(present)

        if rule.required_child_pugh and hepatic_stage not in rule.required_child_pugh:
            return not_triggered

        if rule.min_grade_a_drugs:
            grade_a = [d.id for d in drugs if d.hepatotoxicity.grade == HepaticGrade.A]
            if len(grade_a) < rule.min_grade_a_drugs:
                return not_triggered
            triggered_by.extend(grade_a)

        if rule.min_grade_n1_drugs:
            grade_n1 = [
                d.id for d in drugs
                if d.nephrotoxicity is not None and d.nephrotoxicity.grade == RenalGrade.N1
            ]
            if len(grade_n1) < rule.min_grade_n1_drugs:
                return not_triggered
            triggered_by.extend(grade_n1)

        if rule.required_ckd_stage and renal_stage not in rule.required_ckd_stage:
            return not_triggered

        if rule.required_drug_classes:
            matching = [
                d.id for d in drugs
                if any(matches_drug_class(d, name) for name in rule.required_drug_classes)
            ]
            if not matching:
                return not_triggered
            triggered_by.extend(matching)

        if rule.required_drugs and not triggered_by:
            return not_triggered

        return True, list(dict.fromkeys(triggered_by))

    def _present_drug_ids(self, rule: AlertRule, drugs: Sequence[Drug]) -> Optional[List[str]]:
        """Required drug ids found in the selection, or None if the rule fails."""
        selected = {d.id for d in drugs}
        present = [drug_id for drug_id in rule.required_drugs if drug_id in selected]

        if rule.requires_all_drugs:
            if len(present) < len(rule.required_drugs):
                return None
        elif not present:
            return None
        return present


_engine: Optional[AlertEngine] = None


def get_alert_engine() -> AlertEngine:
    """Shared engine instance."""
    global _engine
    if _engine is None:
        _engine = AlertEngine()
    return _engine


def detect_alerts(
    drugs: Sequence[Drug],
    hepatic_stage: HepaticStage,
    renal_stage: RenalStage,
    rules: Sequence[AlertRule],
) -> List[TriggeredAlert]:
    """Module-level shortcut for AlertEngine.evaluate."""
    return get_alert_engine().evaluate(drugs, hepatic_stage, renal_stage, rules)
