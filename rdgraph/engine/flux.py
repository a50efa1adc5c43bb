"""
simulates the flux of scanning ribosomes 5' to 3' across all start sites

Each start site captures a fraction of the ribosomes reaching it. Ribosomes which translate an ORF may
reinitiate and rejoin the pool available to the start sites downstream of it. The accumulation is greedy
and order dependent, so starts must be processed in ascending position
"""
from typing import Dict, Iterable

from ..util import logger
from .constants import ModelParameters
from .probability import calculate_initiation_probability, calculate_reinitiation_probability, clamp


def compute_translon_flux(starts: Iterable, params=None) -> Dict[int, float]:
    """
    Args:
        starts (Iterable[StartCodon]): the start codons to propagate flux across
        params (ModelParameters): model parameters. The initiation probability is recomputed from the codon
            and its context so that parameter overrides are applied

    Returns:
        Dict[int,float]: mapping of start position to abundance normalized so that the maximum is 1.0
    """
    params = ModelParameters.resolve(params)
    starts = sorted(starts, key=lambda s: s.pos)
    raw_flux = {}
    available = 1.0

    for i, start in enumerate(starts):
        p_init = calculate_initiation_probability(start.codon, start.kozak_score, start.gc_content, params)
        initiated = available * p_init
        raw_flux[start.pos] = initiated

        spacing = 0
        if i + 1 < len(starts):
            spacing = max(0, starts[i + 1].pos - start.stop_pos)
        reinit_flux = initiated * calculate_reinitiation_probability(start.orf_length, spacing, params)
        available = clamp(available * (1 - p_init) + reinit_flux, 0, 1)

    max_flux = max(raw_flux.values(), default=0)
    if max_flux <= 0:
        return raw_flux
    logger.debug(f'normalizing flux across {len(raw_flux)} start sites by {max_flux}')
    return {pos: flux / max_flux for pos, flux in raw_flux.items()}
