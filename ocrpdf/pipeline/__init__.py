"""Parallel OCR dispatch, page reordering and output assembly."""
