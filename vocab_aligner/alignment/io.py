"""Tab-separated alignment files

Format: one header line, then ``source<TAB>target<TAB>similarity<TAB>relation``
per mapping. The relation column is optional and defaults to ``=``.
Entity ids are external identifiers, resolved through an EntityIndex.
"""

import os
from typing import Optional

from .base import Alignment, Mapping, MappingRelation
from .entities import EntityIndex
from ..errors import AlignmentFormatError, ConfigurationError

HEADER = "source\ttarget\tsimilarity\trelation"


def read_tsv(path: str, index: EntityIndex) -> Alignment:
    """Load an alignment, registering unseen entity ids in ``index``"""
    alignment = Alignment()
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.rstrip("\n").rstrip("\r")
            if not line.strip() or line.startswith("#"):
                continue
            if line_number == 1 and line.lower().startswith("source\t"):
                continue
            fields = line.split("\t")
            if len(fields) not in (3, 4):
                raise AlignmentFormatError(
                    path, line_number, f"expected 3 or 4 columns, got {len(fields)}"
                )
            try:
                similarity = float(fields[2])
            except ValueError:
                raise AlignmentFormatError(
                    path, line_number, f"invalid similarity '{fields[2]}'"
                ) from None
            if not 0.0 <= similarity <= 1.0:
                raise AlignmentFormatError(
                    path, line_number, f"similarity {similarity} outside [0, 1]"
                )
            try:
                relation = (
                    MappingRelation.parse(fields[3])
                    if len(fields) == 4 and fields[3]
                    else MappingRelation.EQUIVALENCE
                )
            except ConfigurationError as e:
                raise AlignmentFormatError(path, line_number, str(e)) from None
            alignment.add(
                Mapping(
                    index.register(fields[0]),
                    index.register(fields[1]),
                    similarity,
                    relation,
                )
            )
    return alignment


def write_tsv(
    alignment: Alignment, path: str, index: EntityIndex, precision: Optional[int] = 6
) -> str:
    """Write ``alignment`` in ranking order; returns the absolute path"""
    path = os.path.abspath(path)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(HEADER + "\n")
        for m in alignment:
            sim = round(m.similarity, precision) if precision is not None else m.similarity
            f.write(
                f"{index.uri(m.source_id)}\t{index.uri(m.target_id)}\t"
                f"{sim}\t{m.relationship.value}\n"
            )
    return path
