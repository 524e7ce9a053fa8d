"""
Serving — FastAPI application and bootstrap trigger.

Exposes ``/bootstrap``, ``/ingest`` and ``/search`` over HTTP so the
service can run as a standalone container.
"""
