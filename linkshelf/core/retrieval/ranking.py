"""
Search result ranking.

Pure functions that turn per-chunk vector matches into per-document rankings.

Ordering rule used everywhere here: higher score first; two scores that are
equal or cannot be compared (NaN) are treated as equal, and the sort is
stable, so ties keep the order in which the documents/chunks first appeared
in the vector store response.

Dependencies: functools
System role: Ranking step of the retrieval aggregator
"""

import math
from functools import cmp_to_key
from typing import Iterable

from linkshelf.boundary.vdb.vector_schemas import VectorMatch

ScoredChunk = tuple[float, int]


def compare_scores_desc(a: float, b: float) -> int:
    """
    Comparator for descending score order.

    Returns -1 when a ranks before b, 1 when after, 0 when equal or incomparable.
    """
    if a > b:
        return -1
    if a < b:
        return 1
    return 0


def group_matches(
    matches: Iterable[VectorMatch],
) -> tuple[dict[str, list[ScoredChunk]], dict[str, float]]:
    """
    Group chunk matches per document.

    Args:
        matches: Vector matches in the order returned by the vector store

    Returns:
        tuple: (doc_matches, best_scores) where doc_matches maps document id
        to its (score, chunk_id) pairs in arrival order and best_scores maps
        document id to its highest chunk score. Both dicts preserve
        first-appearance order of documents.
    """
    doc_matches: dict[str, list[ScoredChunk]] = {}
    best_scores: dict[str, float] = {}

    for match in matches:
        document_id = match.metadata.document_id
        score = match.score
        doc_matches.setdefault(document_id, []).append((score, match.metadata.chunk_id))

        best = best_scores.get(document_id)
        if best is None or math.isnan(best) or score > best:
            best_scores[document_id] = score

    return doc_matches, best_scores


def rank_documents(best_scores: dict[str, float], limit: int) -> list[str]:
    """
    Order document ids by best score and keep the first `limit`.

    Args:
        best_scores: Document id -> best chunk score, in first-appearance order
        limit: Maximum number of documents

    Returns:
        list[str]: Ranked document ids
    """
    ranked = sorted(
        best_scores,
        key=cmp_to_key(lambda a, b: compare_scores_desc(best_scores[a], best_scores[b])),
    )
    return ranked[:limit]


def order_chunks(pairs: list[ScoredChunk]) -> list[int]:
    """
    Chunk ids of one document, best matching first.

    Args:
        pairs: (score, chunk_id) pairs in arrival order

    Returns:
        list[int]: Chunk ids
    """
    ordered = sorted(pairs, key=cmp_to_key(lambda a, b: compare_scores_desc(a[0], b[0])))
    return [chunk_id for _, chunk_id in ordered]
