"""
Summarize-and-chunk task.

Extracts plain text from fetched content, splits it into ordered chunks and
asks a Gemini chat model for a title and summary.

Dependencies: bs4, pypdf, langchain_google_genai, langchain_core
System role: Second stage of link ingestion pipeline
"""

import io
import logging

from bs4 import BeautifulSoup
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pypdf import PdfReader

from linkshelf.core.exceptions import ProcessingError
from linkshelf.core.ingestion.bucket_paths import normalize_content_type
from linkshelf.core.ingestion.models import LinkSummary, ProcessedContent
from linkshelf.core.ingestion.tasks.chunking_task import ChunkingTask

logger = logging.getLogger(__name__)

HTML_TYPES = frozenset({"text/html", "application/xhtml+xml"})
TEXT_TYPES = frozenset({
    "application/json",
    "application/xml",
    "application/rss+xml",
    "application/atom+xml",
})

SYSTEM_PROMPT = (
    "You catalogue saved links for a personal bookmark library. "
    "Given the text of a web page or document, return a concise descriptive "
    "title (at most 12 words) and a summary of 2-4 sentences covering what "
    "the content is about. Write in the language of the content."
)


class SummarizingTask:
    """Turn raw link content into title, summary and ordered chunks."""

    def __init__(
        self,
        model_name: str = "gemini-2.5-flash",
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        summary_input_chars: int = 30000,
        llm: BaseChatModel | None = None,
    ) -> None:
        """
        Initialize summarizing task.

        Args:
            model_name: Gemini chat model ID
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            summary_input_chars: Characters of text sent to the model
            llm: Optional chat model (created lazily from model_name if None)
        """
        self._model_name = model_name
        self._summary_input_chars = summary_input_chars
        self._chunking_task = ChunkingTask(chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        self._llm = llm

    @property
    def llm(self) -> BaseChatModel:
        """Lazy-load chat model to avoid initialization cost."""
        if self._llm is None:
            self._llm = ChatGoogleGenerativeAI(model=self._model_name, temperature=0)
        return self._llm

    async def process(self, content: bytes, content_type: str) -> ProcessedContent:
        """
        Extract, chunk and summarize content.

        Args:
            content: Raw fetched bytes
            content_type: MIME type of content

        Returns:
            ProcessedContent: Title, summary and chunks in document order

        Raises:
            ProcessingError: Unsupported type, no text, or model failure
        """
        media_type = normalize_content_type(content_type)
        text, page_title = self.extract_text(content, media_type)
        if not text.strip():
            raise ProcessingError("Content contains no extractable text", content_type=media_type)

        chunks = self._chunking_task.chunk(text)
        summary = await self._summarize(text, media_type)

        title = summary.title.strip() or page_title or "Untitled"
        logger.info(
            f"{__name__}:process - Produced {len(chunks)} chunks",
            extra={"content_type": media_type, "text_length": len(text)},
        )
        return ProcessedContent(title=title, summary=summary.summary.strip(), chunks=chunks)

    def extract_text(self, content: bytes, media_type: str) -> tuple[str, str | None]:
        """
        Extract plain text (and a page title when available).

        Args:
            content: Raw bytes
            media_type: Normalized MIME type

        Returns:
            tuple[str, str | None]: (text, title from the document itself)

        Raises:
            ProcessingError: Unsupported or unreadable content
        """
        if media_type in HTML_TYPES:
            return self._extract_html(content)
        if media_type == "application/pdf":
            return self._extract_pdf(content), None
        if media_type.startswith("text/") or media_type in TEXT_TYPES:
            return content.decode("utf-8", errors="replace"), None
        raise ProcessingError(f"Unsupported content type: {media_type or '<none>'}", content_type=media_type)

    def _extract_html(self, content: bytes) -> tuple[str, str | None]:
        soup = BeautifulSoup(content, "html.parser")
        title = soup.title.get_text(strip=True) if soup.title else None
        for tag in soup(["script", "style", "noscript", "template"]):
            tag.decompose()
        lines = (line.strip() for line in soup.get_text(separator="\n").splitlines())
        return "\n".join(line for line in lines if line), title or None

    def _extract_pdf(self, content: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(content))
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            raise ProcessingError(f"Failed to parse PDF: {e}", content_type="application/pdf") from e
        return "\n\n".join(page for page in pages if page.strip())

    async def _summarize(self, text: str, media_type: str) -> LinkSummary:
        """Ask the chat model for a structured title + summary."""
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=text[: self._summary_input_chars]),
        ]
        try:
            result = await self.llm.with_structured_output(LinkSummary).ainvoke(messages)
        except Exception as e:
            raise ProcessingError(
                f"Summarization failed: {type(e).__name__}: {e}",
                content_type=media_type,
            ) from e

        if not isinstance(result, LinkSummary):
            raise ProcessingError("Summarizer returned no structured output", content_type=media_type)
        return result
