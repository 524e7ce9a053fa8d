"""Semantic search over legal PDF documents backed by Voyage AI and Pinecone."""

__version__ = "0.1.0"
