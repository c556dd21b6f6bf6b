"""Pricing and document-layout engine for the Print Intake Web application."""

__all__ = [
    "composer",
    "document_source",
    "image_store",
    "layouts",
    "page_range",
    "pricing",
]
