"""Alignment data model

Mappings, alignments, entity handles and alignment files.
"""

from .base import Alignment, Mapping, MappingRelation, ranking_key
from .entities import EntityIndex
from .io import read_tsv, write_tsv

__all__ = [
    "Alignment",
    "Mapping",
    "MappingRelation",
    "ranking_key",
    "EntityIndex",
    "read_tsv",
    "write_tsv",
]
