import random

from rdgraph.constants import CANONICAL_START, STOP_CODONS, TRANSLON_CLASS
from rdgraph.engine.base import ReadthroughStop, StartCodon
from rdgraph.engine.translon import Translon, calculate_protein_mw

# AUG at 3 terminated by the UAA at 12. There is also a CUG at 7 (frame 1) with no stop
SHORT_ORF = 'GGGAUGGCUGCUUAAGGG'

# a short uORF (AUG at 2, UAA at 5) followed by the main ORF (ACCAUGG context at 19, UAA at 31)
UORF_SEQUENCE = 'CCAUGUAAGGGGGGGGACCAUGGCCGCCGCCUAA'
UORF_POS = 2
MAIN_POS = 19

# the UAA at 6 may be read through to the UAG at 12
READTHROUGH_SEQUENCE = 'AUGGCCUAAGCCUAGG'


def mock_start(pos, codon=CANONICAL_START, initiation_probability=0.5, orf_length=30, **kwargs):
    args = dict(
        pos=pos,
        codon=codon,
        frame=pos % 3,
        is_canonical=codon == CANONICAL_START,
        stop_pos=pos + orf_length,
        orf_length=orf_length,
        kozak_score=0,
        gc_content=0.5,
        initiation_probability=initiation_probability,
    )
    args.update(kwargs)
    return StartCodon(**args)


def mock_translon(start_nt, end_nt, name='T1', abundance=1.0, classification=TRANSLON_CLASS.CANONICAL, **kwargs):
    args = dict(
        name=name,
        start_nt=start_nt,
        end_nt=end_nt,
        frame=start_nt % 3,
        start_codon=CANONICAL_START,
        kozak_score=0,
        gc_content=0.5,
        classification=classification,
        predicted_protein_size_kda=calculate_protein_mw(end_nt - start_nt),
        predicted_abundance=abundance,
        initiation_probability=0.5,
        orf_length=end_nt - start_nt,
    )
    args.update(kwargs)
    return Translon(**args)


def random_sequences(count=300, seed=1, min_length=0, max_length=120):
    """
    generate random RNA sequences, each paired with a random subset of its stop codons marked as readthrough
    stops. Start and stop codons are spliced in so that most sequences have several overlapping ORFs
    """
    rand = random.Random(seed)
    for _ in range(count):
        length = rand.randint(min_length, max_length)
        seq = [rand.choice('ACGU') for _ in range(length)]
        for _ in range(length // 15):
            pos = rand.randint(0, max(0, length - 3))
            seq[pos:pos + 3] = rand.choice([CANONICAL_START, CANONICAL_START, 'CUG', 'GUG'] + list(STOP_CODONS))
        seq = ''.join(seq)[:length]
        stops = [
            pos for pos in range(0, len(seq) - 2) if seq[pos:pos + 3] in STOP_CODONS
        ]
        readthrough_stops = [
            ReadthroughStop.from_position(pos, rand.random()) for pos in stops if rand.random() < 0.3
        ]
        yield seq, readthrough_stops
