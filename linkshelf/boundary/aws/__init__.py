"""
AWS boundary layer.

Exports: S3BlobStore
"""

from linkshelf.boundary.aws.s3_client import S3BlobStore

__all__ = ["S3BlobStore"]
