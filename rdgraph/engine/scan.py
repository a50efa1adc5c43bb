"""
locates start and stop codons and computes the local sequence features used by the initiation model
"""
from typing import Iterable, List, Optional, Set, Tuple

from ..constants import CANONICAL_START, CODON_SIZE, START_CODONS, STOP_CODONS
from ..util import logger
from .base import StartCodon, StopCodon, get_position
from .constants import ModelParameters
from .probability import calculate_initiation_probability

KOZAK_MINUS3_SCORE = 0.6
KOZAK_PLUS4_SCORE = 0.4


def readthrough_positions(readthrough_stops: Optional[Iterable] = None) -> Set[int]:
    """
    the set of stop codon positions that ribosomes may read through
    """
    positions = set()
    for stop in readthrough_stops or []:
        pos = get_position(stop)
        if pos is not None:
            positions.add(pos)
    return positions


def calculate_kozak_score(sequence: str, start_pos: int) -> float:
    """
    score the context of a start codon from the -3 and +4 positions (relative to the A of AUG as +1)

    Returns:
        float: 0.6 for a purine at -3 plus 0.4 for a G at +4

    Example:
        >>> calculate_kozak_score('CCCAUGG', 3)
        0.4
        >>> calculate_kozak_score('ACCAUGG', 3)
        1.0
    """
    score = 0
    if start_pos >= 3 and sequence[start_pos - 3] in {'G', 'A'}:
        score += KOZAK_MINUS3_SCORE
    if start_pos + 3 < len(sequence) and sequence[start_pos + 3] == 'G':
        score += KOZAK_PLUS4_SCORE
    return score


def calculate_downstream_gc(sequence: str, start_pos: int, window_size: int = 30) -> float:
    """
    GC fraction of the window immediately downstream of the start codon. Strong downstream structure
    slows scanning and favours initiation

    Returns:
        float: the GC fraction or 0.5 if the window is empty
    """
    window_start = start_pos + CODON_SIZE
    window = sequence[window_start:min(len(sequence), window_start + window_size)]
    if not window:
        return 0.5
    gc_count = sum([1 for nt in window if nt in {'G', 'C'}])
    return gc_count / len(window)


def _find_stop(sequence: str, first_codon_pos: int, skip: Set[int]) -> int:
    for pos in range(first_codon_pos, len(sequence) - 2, CODON_SIZE):
        if sequence[pos:pos + CODON_SIZE] in STOP_CODONS and pos not in skip:
            return pos + CODON_SIZE
    return len(sequence)


def find_start_codons(sequence: str, readthrough_stops: Optional[Iterable] = None, params=None) -> List[StartCodon]:
    """
    find all canonical and near-cognate start codons at every offset of the sequence. Each start
    defines its own reading frame so ORFs in different frames may overlap

    Args:
        sequence: the RNA sequence
        readthrough_stops: stop codons (by position) which do not terminate an ORF
        params (ModelParameters): model parameters used for the initiation probability

    Returns:
        list of StartCodon: start codons sorted by position
    """
    params = ModelParameters.resolve(params)
    skip = readthrough_positions(readthrough_stops)
    start_codons = []

    for pos in range(0, len(sequence) - 2):
        codon = sequence[pos:pos + CODON_SIZE]
        if codon not in START_CODONS:
            continue
        stop_pos = _find_stop(sequence, pos + CODON_SIZE, skip)
        kozak_score = calculate_kozak_score(sequence, pos)
        gc_content = calculate_downstream_gc(sequence, pos, params.gc_window)
        start_codons.append(StartCodon(
            pos=pos,
            codon=codon,
            frame=pos % CODON_SIZE,
            is_canonical=codon == CANONICAL_START,
            stop_pos=stop_pos,
            orf_length=stop_pos - pos,
            kozak_score=kozak_score,
            gc_content=gc_content,
            initiation_probability=calculate_initiation_probability(codon, kozak_score, gc_content, params)
        ))
    logger.debug(f'found {len(start_codons)} start codons in a sequence of length {len(sequence)}')
    return start_codons


def find_stop_codons(sequence: str, frame: Optional[int] = None) -> List[StopCodon]:
    """
    find every stop codon triplet in the sequence

    Args:
        sequence: the RNA sequence
        frame: if given, only report stop codons in this reading frame
    """
    stop_codons = []
    for pos in range(0, len(sequence) - 2):
        if frame is not None and pos % CODON_SIZE != frame:
            continue
        codon = sequence[pos:pos + CODON_SIZE]
        if codon in STOP_CODONS:
            stop_codons.append(StopCodon(pos, codon, pos % CODON_SIZE))
    return stop_codons


def find_next_stop_in_frame(sequence: str, start_pos: int, frame: int, readthrough_stops: Optional[Iterable] = None) -> int:
    """
    find the end of the next terminating stop codon in a given frame after some position. Used when
    extending an ORF past a readthrough stop

    Args:
        start_pos: search begins at the first codon boundary of the frame after this position
        frame: the reading frame (0, 1, or 2)

    Returns:
        int: position following the stop codon, or the sequence length if none is found

    Example:
        >>> find_next_stop_in_frame('AUGUAAGGGUAG', 3, 0, [{'pos': 3}])
        12
    """
    first_codon_pos = start_pos + 1 + (frame - start_pos - 1) % CODON_SIZE
    return _find_stop(sequence, first_codon_pos, readthrough_positions(readthrough_stops))


def apply_frameshift(position: int, shift: int) -> Tuple[int, int]:
    """
    Returns:
        tuple of int and int: the shifted position and its reading frame

    Example:
        >>> apply_frameshift(10, -1)
        (9, 0)
    """
    new_pos = position + shift
    return new_pos, new_pos % CODON_SIZE
