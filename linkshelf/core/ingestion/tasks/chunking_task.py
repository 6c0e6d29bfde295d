"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits extracted link text into retrievable chunks while preserving context.

Dependencies: langchain_text_splitters
System role: Chunking step of the summarizer/chunker
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter


class ChunkingTask:
    """Split text into chunks using RecursiveCharacterTextSplitter."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
        """
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
        )

    def chunk(self, text: str) -> list[str]:
        """
        Split text into chunks, in document order.

        Args:
            text: Extracted plain text

        Returns:
            list[str]: Non-empty chunk texts

        Raises:
            ValueError: When text is empty
        """
        if not text or not text.strip():
            raise ValueError("No text to chunk")

        return [chunk for chunk in self._splitter.split_text(text) if chunk.strip()]
