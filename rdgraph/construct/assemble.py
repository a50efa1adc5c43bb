"""
assembles reporter constructs from slices of a source sequence and reporter, linker and spacer sequences
"""
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

from ..constants import CANONICAL_START, CODON_SIZE, STOP_CODONS, normalize_sequence
from ..util import logger
from .constants import (
    DEFAULT_REGION_COLOR,
    LINKER_SEQUENCE,
    PAD_G3_SEQUENCE,
    REGION_COLORS,
    REGION_TYPE,
    REPORTER_PROTEINS,
    REPORTER_STOP,
    REPORTER_TYPES,
    RLUC_FAMILY,
    SAFE_CODONS,
)

MIN_SUGGESTED_UORF_LENGTH = 9
MAX_SUGGESTED_UORF_LENGTH = 300
MIN_FUSION_CDS_LENGTH = 300


@dataclass
class RegionSpec:
    """
    a requested region of a construct

    Attributes:
        type: the :attr:`~rdgraph.construct.constants.REGION_TYPE`
        start: 1-based start of the source slice
        end: end of the source slice (exclusive of the 0-based position, ie. the 1-based inclusive end)
        name: optional display name
        sequence: optional sequence used in place of the source slice
    """
    type: str
    start: Optional[int] = None
    end: Optional[int] = None
    name: Optional[str] = None
    sequence: Optional[str] = None

    @classmethod
    def from_mapping(cls, spec) -> 'RegionSpec':
        if isinstance(spec, RegionSpec):
            return spec
        return cls(
            type=spec['type'],
            start=spec.get('start'),
            end=spec.get('end'),
            name=spec.get('name'),
            sequence=spec.get('sequence'),
        )


@dataclass
class ConstructRegion:
    """
    a region of an assembled construct. When assembled is True, start and end are 0-based half-open
    coordinates in the assembled sequence
    """
    type: str
    start: int
    end: int
    assembled: bool = True
    color: str = DEFAULT_REGION_COLOR
    name: Optional[str] = None

    def __len__(self):
        return self.end - self.start

    def flatten(self) -> Dict:
        return asdict(self)


@dataclass
class AssembledConstruct:
    sequence: str
    regions: List[ConstructRegion] = field(default_factory=list)

    def __len__(self):
        return len(self.sequence)


@dataclass
class ConstructSuggestion:
    type: str
    start: int
    end: int
    reason: str
    regions: List[RegionSpec] = field(default_factory=list)


def region_color(region_type: str) -> str:
    return REGION_COLORS.get(region_type, DEFAULT_REGION_COLOR)


def synthesize_reporter_orf(mw_kda: float, stop: bool = True) -> str:
    """
    build a synthetic open reading frame encoding a protein of the given approximate molecular weight. The
    codons following the leading AUG are drawn from :data:`~rdgraph.construct.constants.SAFE_CODONS` so that
    the reporter introduces no additional start or stop codons

    Args:
        mw_kda: the molecular weight of the protein in kDa
        stop: append a terminal UAA stop codon

    Returns:
        str: the RNA sequence of the open reading frame

    Example:
        >>> synthesize_reporter_orf(0.33)
        'AUGGCCGAGUAA'
    """
    aa_count = max(1, int((mw_kda * 1000) // 110))
    codons = [CANONICAL_START]
    for i in range(aa_count - 1):
        codons.append(SAFE_CODONS[i % len(SAFE_CODONS)])
    if stop:
        codons.append(REPORTER_STOP)
    return ''.join(codons)


def make_reporter_variant(cds: str, region_type: str) -> str:
    """
    derive the variants of the renilla luciferase coding sequence

    - ``RLUC_NO_STOP``: the terminal stop codon is removed
    - ``RLUC_WEAK``: the +4 position (relative to the A of the AUG as +1) is changed from G to C to weaken
      the Kozak context

    Example:
        >>> make_reporter_variant('AUGGCCUAA', 'RLUC_NO_STOP')
        'AUGGCC'
        >>> make_reporter_variant('AUGGCCUAA', 'RLUC_WEAK')
        'AUGCCCUAA'
    """
    if region_type == REGION_TYPE.RLUC_NO_STOP:
        if len(cds) >= CODON_SIZE and cds[-CODON_SIZE:] in STOP_CODONS:
            return cds[:-CODON_SIZE]
    elif region_type == REGION_TYPE.RLUC_WEAK:
        if len(cds) > CODON_SIZE and cds[CODON_SIZE] == 'G':
            return cds[:CODON_SIZE] + 'C' + cds[CODON_SIZE + 1:]
    return cds


def reporter_sequence(region_type: str, reporter_sequences: Optional[Dict[str, str]] = None) -> str:
    """
    get the coding sequence of a reporter region. Sequences supplied by the caller take precedence over
    synthetic ones. The renilla luciferase variants are derived from the RLUC sequence unless given explicitly
    """
    reporter_sequences = reporter_sequences or {}
    if region_type in reporter_sequences:
        return normalize_sequence(reporter_sequences[region_type])
    if region_type in RLUC_FAMILY:
        if REGION_TYPE.RLUC in reporter_sequences:
            cds = normalize_sequence(reporter_sequences[REGION_TYPE.RLUC])
        else:
            cds = synthesize_reporter_orf(REPORTER_PROTEINS.RLUC)
        return make_reporter_variant(cds, region_type)
    return synthesize_reporter_orf(REPORTER_PROTEINS[region_type])


def slice_base_sequence(base_sequence: str, start: Optional[int] = None, end: Optional[int] = None) -> str:
    """
    slice the source sequence using 1-based start and end coordinates. Coordinates outside the sequence
    are clipped

    Example:
        >>> slice_base_sequence('AAGGCCUU', 3, 6)
        'GGCC'
    """
    start = 1 if start is None else start
    end = len(base_sequence) if end is None else end
    start = max(0, start - 1)
    end = max(start, min(end, len(base_sequence)))
    return base_sequence[start:end]


def assemble_construct(base_sequence: str, region_specs, reporter_sequences: Optional[Dict[str, str]] = None) -> AssembledConstruct:
    """
    concatenate the requested regions, in order, into a single construct

    Args:
        base_sequence: the source sequence the UTR and custom regions are sliced from
        region_specs (List[RegionSpec or dict]): the regions in 5' to 3' order
        reporter_sequences: coding sequences by region type to use in place of the synthetic reporters

    Returns:
        AssembledConstruct: the construct sequence and its regions in assembled coordinates
    """
    parts = []
    regions = []
    offset = 0

    for spec in region_specs or []:
        spec = RegionSpec.from_mapping(spec)
        if spec.type in REPORTER_TYPES:
            seq = reporter_sequence(spec.type, reporter_sequences)
        elif spec.type == REGION_TYPE.LINKER:
            seq = LINKER_SEQUENCE
        elif spec.type == REGION_TYPE.PAD_G3:
            seq = PAD_G3_SEQUENCE
        elif spec.sequence is not None:
            seq = normalize_sequence(spec.sequence)
        else:
            seq = slice_base_sequence(base_sequence, spec.start, spec.end)

        parts.append(seq)
        regions.append(ConstructRegion(
            type=spec.type,
            start=offset,
            end=offset + len(seq),
            assembled=True,
            color=region_color(spec.type),
            name=spec.name or spec.type
        ))
        offset += len(seq)

    sequence = ''.join(parts)
    logger.info(f'assembled a construct of {len(sequence)} nt from {len(regions)} regions')
    return AssembledConstruct(sequence, regions)


def suggest_construct_design(sequence: str, start_codons) -> List[ConstructSuggestion]:
    """
    suggest reporter constructs for a sequence: a bicistronic reporter downstream of the uORFs in the 5'
    third of the sequence and an N-terminal reporter fusion to the longest ORF
    """
    suggestions = []
    uorfs = [
        s for s in start_codons
        if s.pos < len(sequence) / 3 and MIN_SUGGESTED_UORF_LENGTH < s.orf_length < MAX_SUGGESTED_UORF_LENGTH
    ]
    if uorfs:
        last_uorf = max([u.stop_pos for u in uorfs])
        suggestions.append(ConstructSuggestion(
            type=REGION_TYPE.UTR5,
            start=1,
            end=min(last_uorf + 50, len(sequence) // 3),
            reason=f'Contains {len(uorfs)} uORF(s) - good for testing translational regulation',
            regions=[
                RegionSpec(REGION_TYPE.UTR5, 1, last_uorf + 50, '5UTR with uORFs'),
                RegionSpec(REGION_TYPE.RLUC, last_uorf + 51, last_uorf + 1050, 'Renilla Luciferase'),
                RegionSpec(REGION_TYPE.LINKER, last_uorf + 1051, last_uorf + 1080, 'Linker'),
                RegionSpec(REGION_TYPE.FLUC, last_uorf + 1081, min(last_uorf + 2900, len(sequence)), 'Firefly Luciferase'),
            ]
        ))

    if start_codons:
        main_cds = start_codons[0]
        for start in start_codons[1:]:
            if start.orf_length > main_cds.orf_length:
                main_cds = start
        if main_cds.orf_length > MIN_FUSION_CDS_LENGTH:
            suggestions.append(ConstructSuggestion(
                type='REPORTER_FUSION',
                start=main_cds.pos,
                end=main_cds.stop_pos,
                reason=f'Main CDS detected ({main_cds.orf_length // CODON_SIZE} aa) - create N-terminal reporter fusion',
                regions=[
                    RegionSpec(REGION_TYPE.UTR5, 1, main_cds.pos - 1, '5UTR'),
                    RegionSpec(REGION_TYPE.RLUC, main_cds.pos, main_cds.pos + 999, 'Renilla Luciferase'),
                    RegionSpec(REGION_TYPE.CUSTOM, main_cds.pos + 1000, main_cds.stop_pos, 'Native CDS'),
                ]
            ))
    return suggestions
