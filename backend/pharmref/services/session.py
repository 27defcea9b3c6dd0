"""
Session state for one reviewing user.

The state is an immutable snapshot; every action produces a new snapshot
through `session_reducer`. `SessionStore` holds the current snapshot and
hands it to the analysis facade on demand.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple, Union

from pharmref.analysis.service import ToxicityAnalyzer, get_analyzer
from pharmref.constants import AlcoholHistory, Axis, HepaticStage, RenalStage
from pharmref.schemas import AlertRule, AnalysisResult, Drug

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    selected_drugs: Tuple[Drug, ...] = ()
    hepatic_stage: HepaticStage = HepaticStage.NORMAL
    renal_stage: RenalStage = RenalStage.NORMAL
    alcohol_history: AlcoholHistory = AlcoholHistory.NONE
    active_tab: Axis = Axis.HEPATO

    @property
    def selected_ids(self) -> Tuple[str, ...]:
        return tuple(d.id for d in self.selected_drugs)


# ==================== Actions ====================

@dataclass(frozen=True)
class AddDrug:
    drug: Drug


@dataclass(frozen=True)
class RemoveDrug:
    drug_id: str


@dataclass(frozen=True)
class ClearDrugs:
    pass


@dataclass(frozen=True)
class SetHepaticStage:
    stage: HepaticStage


@dataclass(frozen=True)
class SetRenalStage:
    stage: RenalStage


@dataclass(frozen=True)
class SetAlcoholHistory:
    history: AlcoholHistory


@dataclass(frozen=True)
class SetActiveTab:
    tab: Axis


SessionAction = Union[
    AddDrug, RemoveDrug, ClearDrugs, SetHepaticStage,
    SetRenalStage, SetAlcoholHistory, SetActiveTab,
]


def session_reducer(state: SessionState, action: SessionAction) -> SessionState:
    """Return the state that results from applying an action."""
    if isinstance(action, AddDrug):
        # Duplicates leave the selection as it is
        if action.drug.id in state.selected_ids:
            return state
        return replace(state, selected_drugs=state.selected_drugs + (action.drug,))

    if isinstance(action, RemoveDrug):
        return replace(
            state,
            selected_drugs=tuple(d for d in state.selected_drugs if d.id != action.drug_id),
        )

    if isinstance(action, ClearDrugs):
        return replace(state, selected_drugs=())

    if isinstance(action, SetHepaticStage):
        return replace(state, hepatic_stage=HepaticStage(action.stage))

    if isinstance(action, SetRenalStage):
        return replace(state, renal_stage=RenalStage(action.stage))

    if isinstance(action, SetAlcoholHistory):
        return replace(state, alcohol_history=AlcoholHistory(action.history))

    if isinstance(action, SetActiveTab):
        return replace(state, active_tab=Axis(action.tab))

    raise TypeError(f"Unknown session action: {type(action).__name__}")


class SessionStore:
    """Holds the current session snapshot."""

    def __init__(
        self,
        state: Optional[SessionState] = None,
        analyzer: Optional[ToxicityAnalyzer] = None,
    ):
        self._state = state or SessionState()
        self._analyzer = analyzer or get_analyzer()

    @property
    def state(self) -> SessionState:
        return self._state

    def dispatch(self, action: SessionAction) -> SessionState:
        self._state = session_reducer(self._state, action)
        return self._state

    def reset(self) -> SessionState:
        """Return to defaults at session end."""
        self._state = SessionState()
        return self._state

    def add_drugs(self, drugs: Sequence[Drug]) -> SessionState:
        for drug in drugs:
            self.dispatch(AddDrug(drug))
        return self._state

    def analyze(self, rules: Sequence[AlertRule]) -> AnalysisResult:
        """Analyze the current snapshot. Recomputed on every call."""
        state = self._state
        logger.debug(
            f"Analyzing session: {len(state.selected_drugs)} drugs, "
            f"Child-Pugh {state.hepatic_stage.value}, CKD {state.renal_stage.value}"
        )
        return self._analyzer.analyze(
            list(state.selected_drugs), state.hepatic_stage, state.renal_stage, rules
        )
