from dataclasses import asdict, dataclass
from typing import Dict, Optional

from ..constants import CANONICAL_START, CODON_SIZE


@dataclass(frozen=True)
class StartCodon:
    """
    a start codon and the open reading frame it initiates

    Attributes:
        pos: position of the first nucleotide of the codon (0-based)
        codon: the 3 letter start codon
        frame: the reading frame (pos mod 3)
        is_canonical: True only for AUG
        stop_pos: position following the terminating stop codon, or the sequence length for an open ORF
        orf_length: stop_pos - pos
        kozak_score: the Kozak context score (0-1)
        gc_content: the downstream GC fraction (0-1)
        initiation_probability: the probability a scanning ribosome initiates here (0.01-0.99)
    """
    pos: int
    codon: str
    frame: int
    is_canonical: bool
    stop_pos: int
    orf_length: int
    kozak_score: float
    gc_content: float
    initiation_probability: float

    @property
    def is_aug(self) -> bool:
        return self.codon == CANONICAL_START

    def flatten(self) -> Dict:
        row = asdict(self)
        row['aa_length'] = self.orf_length // CODON_SIZE
        return row


@dataclass(frozen=True)
class StopCodon:
    pos: int
    codon: str
    frame: int

    def flatten(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class ReadthroughStop:
    """
    a stop codon which ribosomes ignore some fraction of the time
    """
    pos: int
    frame: int
    probability: float = 0.5

    @classmethod
    def from_position(cls, pos: int, probability: float = 0.5) -> 'ReadthroughStop':
        return cls(pos, pos % CODON_SIZE, probability)


@dataclass(frozen=True)
class FrameshiftSite:
    """
    a site where ribosomes shift from one reading frame to another
    """
    pos: int
    from_frame: int
    to_frame: int
    shift: int


@dataclass(frozen=True)
class ReinitiationSite:
    """
    the probability of reinitiating at the downstream start after translating the upstream ORF
    """
    upstream_pos: int
    downstream_pos: int
    spacing: int
    probability: float

    def flatten(self) -> Dict:
        return asdict(self)


def get_position(item) -> Optional[int]:
    """
    get the position of an annotation given as an object or a mapping

    Example:
        >>> get_position(ReadthroughStop(12, 0))
        12
        >>> get_position({'pos': 12})
        12
    """
    try:
        return item.pos
    except AttributeError:
        pass
    try:
        return item['pos']
    except (KeyError, TypeError):
        return None
