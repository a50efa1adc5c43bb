"""
aggregates the scanner and probability model results into the canonical CDS, UTR, uORF and reinitiation
site annotations of a sequence
"""
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from ..constants import TRANSLON_CLASS
from ..util import logger
from .base import ReinitiationSite, StartCodon, StopCodon
from .constants import ModelParameters
from .probability import calculate_reinitiation_probability
from .scan import find_start_codons, find_stop_codons

MIN_REINITIATION_SITE_PROBABILITY = 0.05


class Span(NamedTuple):
    """
    half-open (0-based, end exclusive) span of sequence positions
    """
    start: int
    end: int

    def length(self):
        return max(0, self.end - self.start)


@dataclass(frozen=True)
class CanonicalFeatures:
    start: Optional[StartCodon] = None
    cds: Optional[Span] = None
    utr5: Optional[Span] = None
    utr3: Optional[Span] = None


@dataclass(frozen=True)
class PredictedFeatures:
    start_codons: List[StartCodon] = field(default_factory=list)
    stop_codons: List[StopCodon] = field(default_factory=list)
    uorfs: List[StartCodon] = field(default_factory=list)
    reinitiation_sites: List[ReinitiationSite] = field(default_factory=list)


@dataclass(frozen=True)
class FeatureSet:
    canonical: CanonicalFeatures
    predicted: PredictedFeatures

    def to_dict(self):
        """
        convert to a structure which can be dumped as JSON
        """
        canonical = self.canonical
        return {
            'canonical': {
                'start': canonical.start.flatten() if canonical.start else None,
                'cds': canonical.cds._asdict() if canonical.cds else None,
                'utr5': canonical.utr5._asdict() if canonical.utr5 else None,
                'utr3': canonical.utr3._asdict() if canonical.utr3 else None,
            },
            'predicted': {
                'start_codons': [s.flatten() for s in self.predicted.start_codons],
                'stop_codons': [s.flatten() for s in self.predicted.stop_codons],
                'uorfs': [s.flatten() for s in self.predicted.uorfs],
                'reinitiation_sites': [s.flatten() for s in self.predicted.reinitiation_sites],
            },
        }


def select_canonical_start(start_codons: List[StartCodon]) -> Optional[StartCodon]:
    """
    the AUG with the highest initiation probability, ties broken by the longer ORF and then by the lower
    position. Where there is no AUG the first start codon by position is used
    """
    aug_starts = [s for s in start_codons if s.is_aug]
    if aug_starts:
        return sorted(aug_starts, key=lambda s: (-s.initiation_probability, -s.orf_length, s.pos))[0]
    elif start_codons:
        return min(start_codons, key=lambda s: s.pos)
    return None


def is_uorf(start: StartCodon, canonical: Optional[StartCodon]) -> bool:
    """
    a uORF starts upstream of the canonical start and terminates at or before it
    """
    if canonical is None:
        return False
    return start.pos < canonical.pos and start.stop_pos <= canonical.pos


def classify_start(start: StartCodon, canonical: Optional[StartCodon]) -> str:
    """
    Returns:
        str: the :attr:`~rdgraph.constants.TRANSLON_CLASS` of the start relative to the canonical start
    """
    if canonical is None:
        return TRANSLON_CLASS.DOWNSTREAM
    elif start.pos == canonical.pos:
        return TRANSLON_CLASS.CANONICAL
    elif is_uorf(start, canonical):
        return TRANSLON_CLASS.UORF
    elif start.pos < canonical.pos:
        return TRANSLON_CLASS.UPSTREAM
    return TRANSLON_CLASS.DOWNSTREAM


def find_reinitiation_sites(start_codons: List[StartCodon], params=None) -> List[ReinitiationSite]:
    """
    compute the reinitiation probability between each adjacent (by position) pair of start codons. Only
    pairs where the downstream start follows the end of the upstream ORF are considered
    """
    params = ModelParameters.resolve(params)
    starts = sorted(start_codons, key=lambda s: s.pos)
    sites = []
    for upstream, downstream in zip(starts, starts[1:]):
        spacing = downstream.pos - upstream.stop_pos
        if spacing < 0:
            continue
        probability = calculate_reinitiation_probability(upstream.orf_length, spacing, params)
        if probability > MIN_REINITIATION_SITE_PROBABILITY:
            sites.append(ReinitiationSite(upstream.pos, downstream.pos, spacing, probability))
    return sites


def identify_features(sequence: str, readthrough_stops=None, params=None) -> FeatureSet:
    """
    Args:
        sequence (str): the RNA sequence
        readthrough_stops (List[ReadthroughStop]): stop codons which do not terminate an ORF
        params (ModelParameters): model parameters

    Returns:
        FeatureSet: the canonical and predicted features of the sequence
    """
    params = ModelParameters.resolve(params)
    start_codons = find_start_codons(sequence, readthrough_stops, params)
    stop_codons = find_stop_codons(sequence)
    canonical = select_canonical_start(start_codons)

    if canonical is None:
        canonical_features = CanonicalFeatures()
    else:
        canonical_features = CanonicalFeatures(
            start=canonical,
            cds=Span(canonical.pos, canonical.stop_pos),
            utr5=Span(0, canonical.pos),
            utr3=Span(canonical.stop_pos, len(sequence))
        )
    uorfs = [s for s in start_codons if is_uorf(s, canonical)]
    reinitiation_sites = find_reinitiation_sites(start_codons, params)
    logger.info(
        f'identified {len(start_codons)} start codons, {len(uorfs)} uORFs and {len(reinitiation_sites)} reinitiation sites')
    return FeatureSet(
        canonical_features,
        PredictedFeatures(start_codons, stop_codons, uorfs, reinitiation_sites)
    )
