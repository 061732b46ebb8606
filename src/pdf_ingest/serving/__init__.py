"""
Serving — FastAPI application exposing ingestion over HTTP.
"""
