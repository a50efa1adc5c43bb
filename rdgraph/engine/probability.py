"""
converts sequence features into initiation and reinitiation probabilities

The initiation probability of a start codon is

.. math::

    P_{init} = P_0 \\times f_{kozak} \\times f_{codon} \\times f_{structure}

and the probability that a ribosome terminating an ORF of length :math:`L` reinitiates at a start codon
:math:`S` nucleotides downstream is

.. math::

    P_{reinit} = R_0 \\times e^{-L / L_0} \\times (1 - e^{-S / S_0})

short uORFs and long intercistronic spacing favour reinitiation (40S retention and 60S rejoining)
"""
import math

from ..constants import CANONICAL_START
from .constants import ModelParameters

MIN_INITIATION_PROBABILITY = 0.01
MAX_INITIATION_PROBABILITY = 0.99
MIN_REINITIATION_PROBABILITY = 0.01
MAX_REINITIATION_PROBABILITY = 0.95
MAX_EXPONENT = 700  # largest exponent math.exp will accept without overflow


def clamp(value, lower, upper):
    """
    Example:
        >>> clamp(1.2, 0, 1)
        1
    """
    return max(lower, min(upper, value))


def _exp(value):
    return math.exp(min(value, MAX_EXPONENT))


def calculate_initiation_probability(codon, kozak_score, gc_content, params=None):
    """
    Args:
        codon (str): the start codon
        kozak_score (float): the kozak context score (0-1)
        gc_content (float): the downstream GC fraction (0-1)
        params (ModelParameters): model parameters

    Returns:
        float: the initiation probability, clamped to [0.01, 0.99]

    Example:
        >>> calculate_initiation_probability('AUG', 1, 0.5)
        0.9
    """
    params = ModelParameters.resolve(params)
    f_kozak = 0.5 + kozak_score * 0.5
    f_codon = 1.0 if codon == CANONICAL_START else params.nearCognatePenalty
    # structure only helps: gc below 50% is neutral
    f_structure = 1.0 + max(0, gc_content - 0.5) * params.gcBonus
    p_start = params.baseP * f_kozak * f_codon * f_structure
    return clamp(p_start, MIN_INITIATION_PROBABILITY, MAX_INITIATION_PROBABILITY)


def calculate_reinitiation_probability(orf_length, spacing, params=None):
    """
    Args:
        orf_length (int): length (nt) of the ORF translated before reinitiation
        spacing (int): distance (nt) from the end of the ORF to the downstream start codon
        params (ModelParameters): model parameters

    Returns:
        float: the reinitiation probability, clamped to [0.01, 0.95]
    """
    params = ModelParameters.resolve(params)
    f_length = _exp(-orf_length / params.lengthL0)
    f_spacing = 1 - _exp(-spacing / params.spacingS0)
    p_reinit = params.reinitiationBase * f_length * f_spacing
    return clamp(p_reinit, MIN_REINITIATION_PROBABILITY, MAX_REINITIATION_PROBABILITY)


def calculate_distance_weight(position, params=None):
    """
    weight favouring start codons near the 5' end. Only used for ranking candidate starts, never as a
    factor of the initiation probability

    Example:
        >>> calculate_distance_weight(0)
        1.0
    """
    params = ModelParameters.resolve(params)
    return _exp(-position / params.distanceD0)
