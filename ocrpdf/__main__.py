"""Allow ``python -m ocrpdf``."""

from ocrpdf.cli import main

main()
