"""
Link ingestion pipeline.

Entry point: linkshelf.core.ingestion.entrypoint.IngestionPipeline
Tasks: linkshelf.core.ingestion.tasks
"""
