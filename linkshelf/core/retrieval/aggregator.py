"""
Retrieval aggregator.

Runs a similarity query over chunk vectors and aggregates the matches into
a ranked list of documents, each with its matching chunk positions.

Dependencies: linkshelf.core.interfaces, linkshelf.core.retrieval.ranking
System role: Search orchestration (read-only across vector and metadata stores)
"""

import logging

from linkshelf.configs.retrieval import RetrievalSettings
from linkshelf.core.exceptions import LinkShelfException, StoreError
from linkshelf.core.interfaces import MetadataStore, VectorStore
from linkshelf.core.retrieval.ranking import group_matches, order_chunks, rank_documents
from linkshelf.models.search import SearchResult

logger = logging.getLogger(__name__)


class RetrievalAggregator:
    """Aggregate chunk matches into ranked documents."""

    def __init__(
        self,
        vector_store: VectorStore,
        metadata_store: MetadataStore,
        settings: RetrievalSettings | None = None,
    ) -> None:
        """
        Initialize aggregator.

        Args:
            vector_store: Chunk embedding index
            metadata_store: Document record store
            settings: Candidate pool and result cap (defaults 20 / 5)
        """
        self._vector_store = vector_store
        self._metadata_store = metadata_store
        self._settings = settings or RetrievalSettings()

    async def search(self, query: str) -> list[SearchResult]:
        """
        Search documents by chunk similarity.

        Args:
            query: Free-text query

        Returns:
            list[SearchResult]: At most max_documents results, best first

        Raises:
            StoreError: Vector query failed, or metadata store failed while
                resolving a hit (an absent record is skipped, not raised)
        """
        try:
            matches = await self._vector_store.query(query, self._settings.candidate_pool_size)
        except LinkShelfException:
            raise
        except Exception as e:
            raise StoreError(
                f"Vector query failed: {type(e).__name__}: {e}",
                store="vector",
                operation="query",
            ) from e

        if not matches:
            logger.info(f"{__name__}:search - No vector matches")
            return []

        doc_matches, best_scores = group_matches(matches)
        ranked_ids = rank_documents(best_scores, self._settings.max_documents)

        results: list[SearchResult] = []
        for document_id in ranked_ids:
            record = await self._metadata_store.get_by_id(document_id)
            if record is None:
                logger.warning(
                    f"{__name__}:search - Vector matches reference a missing document, skipping",
                    extra={"document_id": document_id},
                )
                continue
            results.append(
                SearchResult(document=record, chunk_ids=order_chunks(doc_matches[document_id]))
            )

        logger.info(
            f"{__name__}:search - {len(matches)} matches over {len(doc_matches)} documents, "
            f"returning {len(results)}",
        )
        return results
