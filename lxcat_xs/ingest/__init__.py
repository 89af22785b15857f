"""
LXCat-XS Data Ingestion
=======================

Reading of LXCat/BOLSIG electron cross-section files.
"""

from lxcat_xs.ingest.lxcat import (
    LXCatReader,
    LXCatReaderConfig,
    LineCursor,
    load_collection,
    parse_lines,
    parse_lxcat,
)

__all__ = [
    'LXCatReader',
    'LXCatReaderConfig',
    'LineCursor',
    'load_collection',
    'parse_lines',
    'parse_lxcat',
]
