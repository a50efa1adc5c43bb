"""
generates the standard control constructs for a test construct from its feature annotations. All
controls are expressed as in-place codon substitutions of the test sequence
"""
from dataclasses import dataclass, field
from typing import Dict, List

from ..constants import CODON_SIZE

EARLY_STOP_CODONS_IN = 10
DEFAULT_TARGET_ORF_LENGTH = 90
NULL_START_CODON = 'AAG'
EARLY_STOP_CODON = 'UAA'


@dataclass
class ControlConstruct:
    label: str
    mutations: Dict[int, str] = field(default_factory=dict)

    def flatten(self) -> Dict:
        return {
            'label': self.label,
            'mutations': ';'.join([f'{pos}:{codon}' for pos, codon in sorted(self.mutations.items())])
        }


def mutate_codon(sequence: str, pos: int, codon: str) -> str:
    """
    Example:
        >>> mutate_codon('AUGAUGAUG', 3, 'AAG')
        'AUGAAGAUG'
    """
    return sequence[:pos] + codon + sequence[pos + CODON_SIZE:]


def apply_mutations(sequence: str, mutations: Dict[int, str]) -> str:
    """
    apply codon substitutions by position to a sequence
    """
    for pos, codon in sorted(mutations.items()):
        sequence = mutate_codon(sequence, pos, codon)
    return sequence


def generate_controls(sequence: str, features, target_name: str, target_pos: int) -> List[ControlConstruct]:
    """
    Args:
        sequence: the test construct sequence
        features (FeatureSet): the features of the test construct
        target_name: name used to label the controls
        target_pos: position of the target start codon

    Returns:
        List[ControlConstruct]: the test construct (no mutations), an initiation negative control (target
        start to AAG), an early termination control (UAA 10 codons into the target ORF) and, where
        there are AUGs upstream of the target, a positive control with those AUGs removed
    """
    controls = []
    if features is None or not isinstance(target_pos, int):
        return controls

    start_codons = features.predicted.start_codons
    target = None
    for start in start_codons:
        if start.pos == target_pos:
            target = start
            break

    if target is not None:
        target_stop = target.stop_pos
    elif features.canonical.cds is not None:
        target_stop = features.canonical.cds.end
    else:
        target_stop = target_pos + DEFAULT_TARGET_ORF_LENGTH

    controls.append(ControlConstruct(f'{target_name} - Test'))
    controls.append(ControlConstruct(f'{target_name} - Initiation(-) {NULL_START_CODON}', {target_pos: NULL_START_CODON}))

    early_stop_pos = min(target_stop - CODON_SIZE, target_pos + CODON_SIZE * EARLY_STOP_CODONS_IN)
    controls.append(ControlConstruct(f'{target_name} - Early Stop', {early_stop_pos: EARLY_STOP_CODON}))

    upstream_mutations = {s.pos: NULL_START_CODON for s in start_codons if s.pos < target_pos and s.is_aug}
    if upstream_mutations:
        controls.append(ControlConstruct(f'{target_name} - Upstream(-)', upstream_mutations))
    return controls
