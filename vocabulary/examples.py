"""
Example designs.

The LacI/TetR inverter is the canonical synthetic biology example: two
inverter units, each a promoter followed by coding sequences and a
terminator, placed so that they do not overlap.
"""

from typing import Optional, Sequence
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.knowledge_base import KnowledgeBase

from .strands import TOP_STRAND, strand
from .intervals import contains, before, does_not_overlap
from .stranded import NamedStrandedInterval, same_strand


TETR_INVERTER = NamedStrandedInterval("TetR_Inverter")
LACI_INVERTER = NamedStrandedInterval("LacI_Inverter")


def _unit(kb: KnowledgeBase, whole: NamedStrandedInterval,
          parts: Sequence[NamedStrandedInterval]) -> KnowledgeBase:
    """Parts on the strand of the whole, inside it and in order."""
    return kb.tell(
        [same_strand(whole, part) for part in parts],
        [contains(whole, part) for part in parts],
        [before(a, b) for a, b in zip(parts, parts[1:])],
    )


def tetr_inverter(kb: Optional[KnowledgeBase] = None) -> KnowledgeBase:
    """The TetR inverter unit, on the top strand."""
    kb = kb if kb is not None else KnowledgeBase()
    parts = [NamedStrandedInterval(name) for name in ("pTetR", "lacI", "ECK_1")]
    _unit(kb, TETR_INVERTER, parts)
    return kb.tell(strand(TETR_INVERTER, TOP_STRAND))


def laci_inverter(kb: Optional[KnowledgeBase] = None) -> KnowledgeBase:
    """The LacI inverter unit, on an unspecified strand."""
    kb = kb if kb is not None else KnowledgeBase()
    parts = [NamedStrandedInterval(name) for name in ("pLacI", "tetR", "gfp", "ECK_2")]
    return _unit(kb, LACI_INVERTER, parts)


def inverter(kb: Optional[KnowledgeBase] = None) -> KnowledgeBase:
    """Both inverter units, not overlapping."""
    kb = kb if kb is not None else KnowledgeBase()
    tetr_inverter(kb)
    laci_inverter(kb)
    return kb.tell(does_not_overlap(TETR_INVERTER, LACI_INVERTER))
