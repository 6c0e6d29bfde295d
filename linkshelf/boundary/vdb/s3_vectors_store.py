"""
S3 Vectors store for production retrieval.

Stores one vector per chunk under the key "{document_id}-{chunk_id}" with
filterable metadata {document_id, chunk_id}. Query text is embedded with the
same Gemini model as the chunks.

Dependencies: boto3, langchain_core
System role: Production vector store (S3 Vectors)
"""

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from langchain_core.embeddings import Embeddings

from linkshelf.boundary.vdb.vector_schemas import (
    VectorMatch,
    VectorMetadata,
    document_vector_ids,
)
from linkshelf.core.exceptions import StoreError

logger = logging.getLogger(__name__)

# DeleteVectors accepts at most 500 keys per call
DELETE_BATCH_SIZE = 500


def distance_to_score(distance: float, metric: str) -> float:
    """
    Convert an S3 Vectors distance to a similarity score (higher is better).

    cosine: 1 - distance. euclidean: 1 / (1 + distance).
    """
    if metric.lower() == "euclidean":
        return 1.0 / (1.0 + distance)
    return 1.0 - distance


class S3VectorsStore:
    """
    S3 Vectors store for production retrieval.

    Wraps the boto3 s3vectors client; all calls run in a worker thread.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        vectors_bucket: str = "linkshelf-dev-vectors",
        index_name: str = "chunks",
        region: str = "ap-southeast-2",
        client: Any | None = None,
    ) -> None:
        """
        Initialize S3 Vectors store.

        Args:
            embeddings: Embeddings model used for query text
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            client: Optional pre-built boto3 s3vectors client
        """
        self._embeddings = embeddings
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._client = client or boto3.client("s3vectors", region_name=region)

    def _error(self, operation: str, exc: Exception, **details: Any) -> StoreError:
        return StoreError(
            f"S3 Vectors {operation} failed: {exc}",
            store="vector",
            operation=operation,
            details={"bucket": self._vectors_bucket, "index": self._index_name, **details},
        )

    async def insert(
        self,
        vector_id: str,
        metadata: VectorMetadata,
        vector: list[float],
    ) -> None:
        """
        Put one chunk vector.

        Raises:
            StoreError: If the put fails
        """
        try:
            await asyncio.to_thread(
                self._client.put_vectors,
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                vectors=[
                    {
                        "key": vector_id,
                        "data": {"float32": [float(v) for v in vector]},
                        "metadata": metadata.model_dump(mode="json"),
                    }
                ],
            )
        except (ClientError, BotoCoreError) as e:
            raise self._error("insert", e, vector_id=vector_id) from e

        logger.debug(f"{__name__}:insert - Put vector {vector_id}")

    async def query(self, query_text: str, k: int) -> list[VectorMatch]:
        """
        Similarity search for query text.

        Args:
            query_text: Free-text query
            k: Number of results to return

        Returns:
            list[VectorMatch]: Matches, highest score first

        Raises:
            StoreError: If the query fails
        """
        query_vector = await asyncio.to_thread(self._embeddings.embed_query, query_text)

        try:
            response = await asyncio.to_thread(
                self._client.query_vectors,
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                queryVector={"float32": [float(v) for v in query_vector]},
                topK=k,
                returnMetadata=True,
                returnDistance=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise self._error("query", e, k=k) from e

        metric = response.get("distanceMetric", "cosine")
        matches = [
            VectorMatch(
                vector_id=item["key"],
                score=distance_to_score(float(item.get("distance", 0.0)), metric),
                metadata=VectorMetadata(**item.get("metadata", {})),
            )
            for item in response.get("vectors", [])
        ]

        logger.info(
            f"{__name__}:query - Found {len(matches)} results",
            extra={"k": k, "distance_metric": metric},
        )
        return matches

    async def delete_by_document(self, document_id: str, count: int) -> None:
        """
        Delete the vectors "{document_id}-0" .. "{document_id}-{count - 1}".

        Keys that do not exist are ignored by S3 Vectors.

        Raises:
            StoreError: If a delete batch fails
        """
        keys = document_vector_ids(document_id, count)
        for start in range(0, len(keys), DELETE_BATCH_SIZE):
            batch = keys[start : start + DELETE_BATCH_SIZE]
            try:
                await asyncio.to_thread(
                    self._client.delete_vectors,
                    vectorBucketName=self._vectors_bucket,
                    indexName=self._index_name,
                    keys=batch,
                )
            except (ClientError, BotoCoreError) as e:
                raise self._error(
                    "delete",
                    e,
                    document_id=document_id,
                    deleted_before_failure=start,
                ) from e

        logger.info(
            f"{__name__}:delete_by_document - Deleted document vectors",
            extra={"document_id": document_id, "chunk_count": count},
        )
