#!/usr/bin/env python3
"""
Vocab Aligner Demo Script

This script demonstrates the matching pipeline over two tiny vocabularies,
using the label matcher as the lexical baseline and a simulated oracle for
interactive selection.

Usage:
    python demo.py

Requirements:
    - Install the package: pip install -e .
"""

import sys
import logging

from vocab_aligner import (
    EntityIndex,
    MatchPipeline,
    MatcherSuite,
    ReferenceOracle,
    RunConfig,
)
from vocab_aligner.alignment import Alignment, Mapping
from vocab_aligner.ensemble import LabelMatcher, PrecomputedMatcher

SOURCE = {
    "src#Heart": "heart",
    "src#HeartValve": "heart valve",
    "src#Lung": "lung",
    "src#Kidney": "kidney",
    "src#Liver": "hepatic organ",
}
TARGET = {
    "tgt#Heart": "Heart",
    "tgt#CardiacValve": "cardiac valve",
    "tgt#Lungs": "lungs",
    "tgt#Kidney": "kidneys",
    "tgt#Liver": "liver",
}
REFERENCE = [
    ("src#Heart", "tgt#Heart"),
    ("src#HeartValve", "tgt#CardiacValve"),
    ("src#Lung", "tgt#Lungs"),
    ("src#Kidney", "tgt#Kidney"),
    ("src#Liver", "tgt#Liver"),
]


def main():
    """Main demo function"""

    logging.basicConfig(
        level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    # Disable propagation to avoid duplicate output
    logging.getLogger("vocab_aligner").propagate = False

    index = EntityIndex()
    source_labels = {index.register(k): v for k, v in SOURCE.items()}
    target_labels = {index.register(k): v for k, v in TARGET.items()}
    reference = Alignment(
        Mapping(index.handle(s), index.handle(t), 1.0) for s, t in REFERENCE
    )

    # A second signal: background knowledge that knows "hepatic" means liver
    synonyms = Alignment(
        [
            Mapping(index.handle("src#Liver"), index.handle("tgt#Liver"), 0.8),
            Mapping(index.handle("src#HeartValve"), index.handle("tgt#CardiacValve"), 0.65),
        ]
    )

    config = RunConfig.from_dict(
        steps=["word", "select"], threshold=0.3, interactive=True
    )
    suite = MatcherSuite(
        lexical=LabelMatcher(source_labels, target_labels),
        word=lambda language, strategy: PrecomputedMatcher(synonyms, name="synonyms"),
        oracle=ReferenceOracle(reference, index),
        entity_index=index,
    )

    print("Vocab Aligner Demo")
    print("=" * 50)
    run = MatchPipeline(config, suite).match()

    for m in run.alignment:
        print(
            f"{index.uri(m.source_id):<16} {m.relationship.value} "
            f"{index.uri(m.target_id):<18} {m.similarity:.3f}"
        )
    if run.interactions is not None:
        print(
            f"\nOracle input: {run.interactions.total} "
            f"(positive {run.interactions.positive})"
        )

    print("\nDemo completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
