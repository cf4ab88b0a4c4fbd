"""Scanned PDF text extraction.

Rasterizes a scanned PDF, runs Tesseract OCR on the pages in parallel,
restores page order and passes the text through configurable line and
document filters.
"""
