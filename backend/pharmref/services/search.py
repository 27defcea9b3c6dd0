"""
Drug search and relevance ranking.

English fields match case-insensitively; local-language fields match as
exact substrings.
"""
from functools import cmp_to_key
from typing import List, Optional, Sequence, Tuple

from pharmref.constants import Limits
from pharmref.schemas import Drug


def _normalize(text: str) -> str:
    return text.lower().strip()


def matches_drug(drug: Drug, query: str) -> bool:
    """Check if a drug matches a search query. An empty query matches everything."""
    normalized = _normalize(query)
    if not normalized:
        return True

    if normalized in _normalize(drug.name_en):
        return True
    if query in drug.name_local:
        return True
    if any(query in brand for brand in drug.brand_names_local):
        return True
    if any(normalized in _normalize(brand) for brand in drug.brand_names_en):
        return True
    if normalized in _normalize(drug.drug_class):
        return True
    if drug.drug_class_en and normalized in _normalize(drug.drug_class_en):
        return True
    return False


def filter_drugs(drugs: Sequence[Drug], query: str) -> List[Drug]:
    if not query.strip():
        return list(drugs)
    return [d for d in drugs if matches_drug(d, query)]


def _relevance_checks(drug: Drug, query: str, normalized: str) -> Tuple[bool, ...]:
    name_en = _normalize(drug.name_en)
    return (
        name_en == normalized,
        drug.name_local == query,
        name_en.startswith(normalized),
        drug.name_local.startswith(query),
        any(normalized in _normalize(b) for b in drug.brand_names_en),
        any(query in b for b in drug.brand_names_local),
    )


def sort_by_relevance(drugs: Sequence[Drug], query: str) -> List[Drug]:
    """
    Order drugs by how well they match the query.

    Exact English name, exact local name, English prefix, local prefix,
    English brand match, local brand match; then local name alphabetically.
    """
    normalized = _normalize(query)
    if not normalized:
        return list(drugs)

    def compare(a: Drug, b: Drug) -> int:
        for a_hit, b_hit in zip(_relevance_checks(a, query, normalized),
                                _relevance_checks(b, query, normalized)):
            if a_hit and not b_hit:
                return -1
            if b_hit and not a_hit:
                return 1
        return (a.name_local > b.name_local) - (a.name_local < b.name_local)

    return sorted(drugs, key=cmp_to_key(compare))


def search_drugs(drugs: Sequence[Drug], query: str, limit: Optional[int] = None) -> List[Drug]:
    """Filter then rank; empty query returns nothing, as there is nothing to suggest."""
    if not query.strip():
        return []
    limit = min(limit or Limits.DRUG_SEARCH_LIMIT, Limits.MAX_DRUG_SEARCH_LIMIT)
    return sort_by_relevance(filter_drugs(drugs, query), query)[:limit]


def highlight_match(text: str, query: str) -> List[Tuple[str, bool]]:
    """Split text into (segment, highlighted) parts around the first match."""
    if not query.strip():
        return [(text, False)]

    index = text.lower().find(query.lower())
    if index == -1:
        return [(text, False)]

    end = index + len(query)
    parts: List[Tuple[str, bool]] = []
    if index > 0:
        parts.append((text[:index], False))
    parts.append((text[index:end], True))
    if end < len(text):
        parts.append((text[end:], False))
    return parts
