"""
builds the ranked and bounded list of translation events (translons) for a sequence and predicts the
protein products they would give rise to in a reporter construct
"""
from dataclasses import asdict, dataclass, field, replace
from typing import Dict, List, Optional

from ..constants import AVERAGE_AA_MASS, CODON_SIZE, translate
from ..construct.constants import REGION_TYPE, REPORTER_PROTEINS, RLUC_FAMILY
from ..interval import Interval
from ..util import logger
from .base import StartCodon, get_position
from .constants import ModelParameters
from .features import classify_start, identify_features, select_canonical_start
from .flux import compute_translon_flux

PRODUCT_OVERLAP_FRACTION = 0.5


@dataclass
class Translon:
    """
    a candidate translation event from a start codon to its terminating stop (or the sequence end)

    Attributes:
        name: display name (T1, T2, ...) in ranked order
        start_nt: position of the start codon (0-based)
        end_nt: position following the terminating stop codon
        classification: the :attr:`~rdgraph.constants.TRANSLON_CLASS`
        predicted_protein_size_kda: size of the protein product from the ORF length
        predicted_abundance: the normalized flux at the start codon (0-1)
    """
    name: str
    start_nt: int
    end_nt: int
    frame: int
    start_codon: str
    kozak_score: float
    gc_content: float
    classification: str
    predicted_protein_size_kda: float
    predicted_abundance: float
    initiation_probability: float
    orf_length: int

    @property
    def pos(self):
        return self.start_nt

    @classmethod
    def from_start_codon(cls, start: StartCodon, classification: str, abundance: float, name: str = '') -> 'Translon':
        return cls(
            name=name,
            start_nt=start.pos,
            end_nt=start.stop_pos,
            frame=start.frame,
            start_codon=start.codon,
            kozak_score=start.kozak_score,
            gc_content=start.gc_content,
            classification=classification,
            predicted_protein_size_kda=calculate_protein_mw(start.orf_length),
            predicted_abundance=abundance,
            initiation_probability=start.initiation_probability,
            orf_length=start.orf_length
        )

    def flatten(self) -> Dict:
        return asdict(self)


@dataclass
class ProteinProduct:
    name: str
    reporters: List[str] = field(default_factory=list)
    mw: float = 0
    abundance: float = 0
    start_pos: int = 0
    end_pos: int = 0

    def flatten(self) -> Dict:
        row = asdict(self)
        row['reporters'] = ';'.join(self.reporters)
        return row


def calculate_protein_mw(orf_length_nt: int) -> float:
    """
    approximate molecular weight of the protein encoded by an ORF, using the average residue mass

    Args:
        orf_length_nt: ORF length in nucleotides

    Returns:
        float: the molecular weight in kDa

    Example:
        >>> calculate_protein_mw(300)
        11.0
    """
    aa_count = orf_length_nt // CODON_SIZE
    return aa_count * AVERAGE_AA_MASS / 1000


def translate_sequence(nt_sequence: str) -> str:
    """
    translate an RNA sequence from its first nucleotide. Stop codons are given as ``*`` and codons which
    cannot be translated as ``X``
    """
    return translate(nt_sequence)


def _ensured_positions(ensure_starts) -> List[int]:
    positions = []
    for item in ensure_starts or []:
        pos = item if isinstance(item, int) else get_position(item)
        if pos is not None and pos not in positions:
            positions.append(pos)
    return positions


def _ranking_key(translon: Translon):
    return (-translon.predicted_abundance, translon.start_nt)


def build_translons(
    sequence: str,
    limit: Optional[int] = None,
    start_codons: Optional[List[StartCodon]] = None,
    features=None,
    params=None,
    ensure_starts=None,
    readthrough_stops=None
) -> List[Translon]:
    """
    Args:
        sequence: the RNA sequence
        limit: the maximum number of translons to return (excluding ensured starts). Defaults to
            the :term:`translon_limit`
        start_codons: precomputed start codons to use in place of the scanned ones
        features (FeatureSet): precomputed features of the sequence
        params (ModelParameters): model parameters
        ensure_starts: positions of start codons which must be included even if they fall outside the limit
        readthrough_stops: used only when the features must be computed

    Returns:
        List[Translon]: translons in descending order of abundance, named T1 to Tn
    """
    params = ModelParameters.resolve(params)
    if limit is None:
        limit = params.translon_limit

    if features is not None:
        canonical = features.canonical.start
        if start_codons is None:
            start_codons = features.predicted.start_codons
    elif start_codons is not None:
        canonical = select_canonical_start(start_codons)
    else:
        features = identify_features(sequence, readthrough_stops, params)
        canonical = features.canonical.start
        start_codons = features.predicted.start_codons

    flux = compute_translon_flux(start_codons, params)
    candidates = sorted([
        Translon.from_start_codon(start, classify_start(start, canonical), flux.get(start.pos, 0))
        for start in start_codons
    ], key=_ranking_key)

    selected = candidates[:max(0, limit)]
    selected_positions = {t.start_nt for t in selected}
    by_position = {t.start_nt: t for t in candidates}

    for pos in _ensured_positions(ensure_starts):
        if pos in selected_positions:
            continue
        if pos not in by_position:
            logger.warning(f'cannot ensure the start at position {pos}. No start codon found')
            continue
        selected.append(by_position[pos])
        selected_positions.add(pos)

    selected.sort(key=_ranking_key)
    logger.debug(f'selected {len(selected)} of {len(candidates)} candidate translons')
    return [replace(t, name=f'T{i + 1}') for i, t in enumerate(selected)]


def _region_attr(region, attr, default=None):
    if isinstance(region, dict):
        return region.get(attr, default)
    return getattr(region, attr, default)


def _reporter_protein(region_type):
    if region_type in RLUC_FAMILY:
        return REGION_TYPE.RLUC
    elif region_type in REPORTER_PROTEINS:
        return region_type
    return None


def predict_protein_products(translons: List[Translon], regions) -> List[ProteinProduct]:
    """
    predict which reporter proteins each translon would produce. A translon produces a reporter if it
    starts inside the reporter region or overlaps at least half of it, and is in the same frame as the
    reporter start. This is an approximation used for display only and ignores frameshifts and readthrough

    Args:
        translons: the translons of an assembled construct
        regions: the construct regions (objects or mappings with type, start and end in assembled coordinates)

    Returns:
        List[ProteinProduct]: one product per translon
    """
    reporter_regions = []
    for region in regions or []:
        protein = _reporter_protein(_region_attr(region, 'type'))
        start, end = _region_attr(region, 'start'), _region_attr(region, 'end')
        if protein is None or start is None or end is None or end <= start:
            continue
        reporter_regions.append((_region_attr(region, 'name') or protein, protein, start, end))

    products = []
    for translon in translons:
        reporters = []
        total_mw = 0
        orf = Interval.from_span(translon.start_nt, translon.end_nt)
        for name, protein, start, end in reporter_regions:
            if translon.frame != start % CODON_SIZE:
                continue
            overlap = 0
            if orf is not None and Interval.overlaps(orf, (start, end - 1)):
                overlap = len(orf & Interval(start, end - 1))
            starts_inside = start <= translon.start_nt < end
            if starts_inside or overlap >= PRODUCT_OVERLAP_FRACTION * (end - start):
                reporters.append(name)
                total_mw += REPORTER_PROTEINS[protein]

        if not total_mw:
            total_mw = calculate_protein_mw(translon.end_nt - translon.start_nt)

        products.append(ProteinProduct(
            name=translon.name,
            reporters=reporters,
            mw=total_mw,
            abundance=translon.predicted_abundance,
            start_pos=translon.start_nt,
            end_pos=translon.end_nt
        ))
    return products
