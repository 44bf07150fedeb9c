"""Utilities for rendering, assembling, and generating README pages."""

from .assembler import DocumentAssembler, assemble
from .models import HeadingRecord, TocState
from .page_generator import PageGenerator
from .renderer import DocumentRenderer, render_document
from .toc import build_toc

__all__ = [
    "DocumentAssembler",
    "DocumentRenderer",
    "HeadingRecord",
    "PageGenerator",
    "TocState",
    "assemble",
    "build_toc",
    "render_document",
]
