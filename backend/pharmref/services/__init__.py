"""Services module: dataset loading, store, search, session state and reports."""

from pharmref.services.dataset import load_dataset, parse_bundle
from pharmref.services.report import generate_text_report
from pharmref.services.search import filter_drugs, highlight_match, matches_drug, search_drugs, sort_by_relevance
from pharmref.services.session import SessionState, SessionStore, session_reducer
from pharmref.services.store import ReferenceStore, create_reference_store, initialize_store

__all__ = [
    "load_dataset",
    "parse_bundle",
    "generate_text_report",
    "filter_drugs",
    "highlight_match",
    "matches_drug",
    "search_drugs",
    "sort_by_relevance",
    "SessionState",
    "SessionStore",
    "session_reducer",
    "ReferenceStore",
    "create_reference_store",
    "initialize_store",
]
