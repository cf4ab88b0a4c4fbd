"""External OCR collaborators: PDF rasterization and Tesseract."""
