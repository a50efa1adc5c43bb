from ..constants import RdgNamespace

REGION_TYPE = RdgNamespace(
    UTR5='5UTR',
    UTR3='3UTR',
    CUSTOM='CUSTOM',
    RLUC='RLUC',
    RLUC_WEAK='RLUC_WEAK',
    RLUC_NO_STOP='RLUC_NO_STOP',
    FLUC='FLUC',
    GFP='GFP',
    LINKER='LINKER',
    PAD_G3='PAD_G3'
)
""":class:`RdgNamespace`: holds controlled vocabulary for the types of region making up a reporter construct

- ``5UTR``, ``3UTR``, ``CUSTOM``: slices of the source sequence
- ``RLUC``, ``RLUC_WEAK``, ``RLUC_NO_STOP``: renilla luciferase and its weak-context and stopless variants
- ``FLUC``: firefly luciferase
- ``GFP``: green fluorescent protein
- ``LINKER``: a flexible (Gly4Ser)x2 linker
- ``PAD_G3``: a GGG spacer
"""

RLUC_FAMILY = {REGION_TYPE.RLUC, REGION_TYPE.RLUC_WEAK, REGION_TYPE.RLUC_NO_STOP}
""":class:`set`: region types sharing the renilla luciferase coding sequence"""

REPORTER_TYPES = RLUC_FAMILY | {REGION_TYPE.FLUC, REGION_TYPE.GFP}
""":class:`set`: region types which are replaced by a reporter open reading frame"""

REPORTER_PROTEINS = RdgNamespace()
""":class:`RdgNamespace`: approximate molecular weight (kDa) of the reporter proteins and tags"""
REPORTER_PROTEINS.add('RLUC', 36, defn='Renilla Luciferase')
REPORTER_PROTEINS.add('FLUC', 61, defn='Firefly Luciferase')
REPORTER_PROTEINS.add('GFP', 27, defn='Green Fluorescent Protein')
REPORTER_PROTEINS.add('FLAG', 1, defn='FLAG Tag')
REPORTER_PROTEINS.add('HA', 1, defn='HA Tag')

LINKER_SEQUENCE = 'GGCGGCGGCGGCAGC' * 2
""":class:`str`: the flexible linker (GGGGS)x2"""

PAD_G3_SEQUENCE = 'GGG'

SAFE_CODONS = ('GCC', 'GAG', 'AAG', 'GGC', 'CAG', 'CCC')
""":class:`tuple`: codons used to build synthetic reporters. None contains a U, so no combination of them
can produce a stop codon or a U-containing start codon in any frame, and no boundary between them forms ACG
"""

REPORTER_STOP = 'UAA'

REGION_COLORS = {
    REGION_TYPE.RLUC: '#2563EB',
    REGION_TYPE.RLUC_WEAK: '#2563EB',
    REGION_TYPE.RLUC_NO_STOP: '#2563EB',
    REGION_TYPE.FLUC: '#DC2626',
    REGION_TYPE.LINKER: '#F59E0B',
    REGION_TYPE.UTR5: '#94A3B8',
    REGION_TYPE.UTR3: '#CBD5E1',
    REGION_TYPE.CUSTOM: '#6B7280',
    REGION_TYPE.GFP: '#10B981',
}
DEFAULT_REGION_COLOR = '#64748b'
