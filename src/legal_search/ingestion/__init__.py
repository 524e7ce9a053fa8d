"""
Ingestion — PDF loading, chunking, embedding and upsert into Pinecone.

This package is the ETL-like pipeline that turns the legal PDFs in the
documents directory into embedded chunks stored in a vector index.
"""
