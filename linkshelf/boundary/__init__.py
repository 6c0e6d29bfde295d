"""
Boundary layer: adapters for S3, S3 Vectors/FAISS and the metadata database.
"""
