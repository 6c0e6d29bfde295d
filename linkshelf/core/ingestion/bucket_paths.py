"""
Blob store key derivation.

Content is stored at "<prefix>/<document_id>.<extension>", the extension
being derived from the MIME type returned by the fetcher.

Dependencies: None
System role: Storage path naming for raw link content
"""

DEFAULT_EXTENSION = "bin"

_EXTENSIONS: dict[str, str] = {
    "text/html": "html",
    "application/xhtml+xml": "html",
    "text/plain": "txt",
    "text/markdown": "md",
    "text/csv": "csv",
    "text/xml": "xml",
    "application/xml": "xml",
    "application/rss+xml": "xml",
    "application/atom+xml": "xml",
    "application/json": "json",
    "application/pdf": "pdf",
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}


def normalize_content_type(content_type: str | None) -> str:
    """
    Strip parameters and lowercase a Content-Type value.

    "text/HTML; charset=UTF-8" -> "text/html"
    """
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def extension_for_content_type(content_type: str | None) -> str:
    """Map a MIME type to a file extension, "bin" when unknown."""
    return _EXTENSIONS.get(normalize_content_type(content_type), DEFAULT_EXTENSION)


def build_bucket_path(content_type: str | None, document_id: str, prefix: str = "content") -> str:
    """
    Build the blob store key for a document's raw content.

    Args:
        content_type: MIME type of the content
        document_id: Document id
        prefix: Key prefix (no trailing slash needed)

    Returns:
        str: e.g. "content/5f1c....html"
    """
    extension = extension_for_content_type(content_type)
    prefix = prefix.strip("/")
    if prefix:
        return f"{prefix}/{document_id}.{extension}"
    return f"{document_id}.{extension}"
