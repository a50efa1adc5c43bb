"""
module responsible for small utility functions and constants used throughout the rdgraph package
"""
import argparse
import os
import re

from Bio.Data.CodonTable import standard_rna_table


PROGNAME = 'rdgraph'


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class RdgNamespace:
    """
    a fixed set of named values: a controlled vocabulary or a group of typed, documented defaults. Members
    are read as attributes or items. A member registered as env_overwritable is read from the environment
    variable ``RDG_<NAME>`` (cast with the member type) when that variable is set

    Example:
        >>> frames = RdgNamespace(FIRST='frame0', SECOND='frame1')
        >>> frames.FIRST, frames['SECOND']
        ('frame0', 'frame1')
        >>> frames('frame1')
        'frame1'
    """

    def __init__(self, **kwargs):
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_env_overwritable', set())
        for attr, value in kwargs.items():
            self.add(attr, value)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, ', '.join(['{}={}'.format(k, repr(v)) for k, v in self.items()]))

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            members = object.__getattribute__(self, '_members')
            if attr not in members:
                raise err
            env_name = 'RDG_{}'.format(attr).upper()
            if self.is_env_overwritable(attr) and env_name in os.environ:
                return self._types[attr](os.environ[env_name].strip())
            return members[attr]

    def __getitem__(self, key):
        return getattr(self, key)

    def __setattr__(self, attr, val):
        raise AttributeError('members are registered with add', attr)

    def __contains__(self, attr):
        return attr in self._members

    def __iter__(self):
        return iter(self.keys())

    def is_env_overwritable(self, attr):
        return attr in self._env_overwritable

    def keys(self):
        return list(self._members)

    def values(self):
        return [self[k] for k in self._members]

    def items(self):
        return [(k, self[k]) for k in self._members]

    def add(self, attr, value, defn=None, cast_type=None, env_overwritable=False):
        """
        register a member

        Args:
            attr (str): name of the member
            value: the (default) value
            defn (str): description used for the command line help
            cast_type (callable): used to cast command line, config and environment values. Defaults to the
                type of the value
            env_overwritable (bool): read the value from ``RDG_<NAME>`` when it is set

        Raises:
            AttributeError: the member already exists or the name is private
        """
        if attr.startswith('_'):
            raise AttributeError('cannot add a private member', attr)
        if attr in self._members:
            raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
        cast_type = cast_type or type(value)
        self._types[attr] = cast_boolean if cast_type == bool else cast_type
        if defn:
            self._defns[attr] = defn
        if env_overwritable:
            self._env_overwritable.add(attr)
        self._members[attr] = value

    def type(self, attr, *pos):
        """
        the cast function of a member, or the default (when given) for a name which is not a member
        """
        if attr in self._types or not pos:
            return self._types[attr]
        return pos[0]

    def define(self, attr, *pos):
        """
        Example:
            >>> nspace = RdgNamespace()
            >>> nspace.add('width', 1000, defn='The drawing width in pixels')
            >>> nspace.define('width')
            'The drawing width in pixels'
            >>> nspace.define('height', '')
            ''
        """
        if attr in self._defns or not pos:
            return self._defns[attr]
        return pos[0]

    def enforce(self, value):
        """
        checks that the value is one of the members

        Raises:
            KeyError: the value is not a member
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def __call__(self, value):
        try:
            return self.enforce(value)
        except KeyError:
            raise TypeError('Invalid value {} for {}. Must be a valid member: {}'.format(
                repr(value), self.__class__.__name__, self.values()))


def float_fraction(num):
    """
    cast input to a float

    Args:
        num: input to cast

    Returns:
        float

    Raises:
        TypeError: if the input cannot be cast to a float or the number is not between 0 and 1
    """
    try:
        num = float(num)
    except ValueError:
        raise argparse.ArgumentTypeError('Must be a value between 0 and 1')
    if num < 0 or num > 1:
        raise argparse.ArgumentTypeError('Must be a value between 0 and 1')
    return num


SUBCOMMAND = RdgNamespace(
    ANALYZE='analyze',
    DRAW='draw',
    ASSEMBLE='assemble',
    CONTROLS='controls'
)
""":class:`RdgNamespace`: holds controlled vocabulary for allowed sub-commands of the command line interface

- ``analyze``: compute start codons, features and translons for a sequence
- ``draw``: render the decision graph of a sequence as svg
- ``assemble``: build a reporter construct from region specifications
- ``controls``: generate control constructs for a target start codon
"""

CODON_SIZE = 3
""":class:`int`: the number of bases making up a codon"""

CANONICAL_START = 'AUG'
""":class:`str`: the canonical start codon"""

START_CODONS = ('AUG', 'CUG', 'UUG', 'GUG', 'ACG', 'AUU', 'AUA', 'AUC')
""":class:`tuple`: the canonical start codon followed by the recognized near-cognate start codons"""

STOP_CODONS = ('UAA', 'UAG', 'UGA')
""":class:`tuple`: the stop codons"""

STOP_AA = '*'
""":class:`str`: the character used to represent a stop codon in a translated sequence"""

UNKNOWN_AA = 'X'
""":class:`str`: the character used to represent an untranslatable codon"""

AVERAGE_AA_MASS = 110
""":class:`int`: average mass of an amino acid residue in Daltons"""


TRANSLON_CLASS = RdgNamespace(CANONICAL='canonical', UORF='uORF', UPSTREAM='upstream', DOWNSTREAM='downstream')
""":class:`RdgNamespace`: holds controlled vocabulary for the classification of a translon relative to the canonical start

- ``CANONICAL``: the translon initiates at the canonical start
- ``UORF``: the translon starts and terminates upstream of the canonical start
- ``UPSTREAM``: the translon starts upstream of the canonical start but is not a uORF
- ``DOWNSTREAM``: the translon starts downstream of the canonical start
"""


NODE_TYPE = RdgNamespace(
    ROOT='root',
    DECISION='decision',
    SCANNING='scanning',
    ENDPOINT='endpoint',
    END='end',
    READTHROUGH_DECISION='readthrough_decision'
)
""":class:`RdgNamespace`: holds controlled vocabulary for the nodes of a decision graph layout"""


EDGE_TYPE = RdgNamespace(
    NONCODING='noncoding',
    VERTICAL_BRANCH='vertical_branch',
    TRANSLATION='translation',
    READTHROUGH='readthrough',
    REINITIATION='reinitiation'
)
""":class:`RdgNamespace`: holds controlled vocabulary for the edges of a decision graph layout

- ``NONCODING``: scanning along the non-coding rail
- ``VERTICAL_BRANCH``: the branch from a decision point up to translation or down to continued scanning
- ``TRANSLATION``: an elongating ribosome over an open reading frame
- ``READTHROUGH``: a conditional translation segment past a leaky stop codon
- ``REINITIATION``: a terminated ribosome dropping back down to the scanning rail
"""


def normalize_sequence(seq):
    """
    convert an input nucleotide sequence to the upper case RNA alphabet

    Example:
        >>> normalize_sequence('atgTT')
        'AUGUU'
    """
    return re.sub(r'\s+', '', str(seq)).upper().replace('T', 'U')


def translate(seq, reading_frame=0):
    """
    given an RNA sequence, translates it and returns the protein amino acid sequence. Stop codons
    are included as :data:`STOP_AA` and untranslatable codons as :data:`UNKNOWN_AA`

    Args:
        seq (str): the input RNA sequence
        reading_frame (int): where to start translating the sequence

    Returns:
        str: the amino acid sequence

    Example:
        >>> translate('AUGGCUUAA')
        'MA*'
    """
    reading_frame = reading_frame % CODON_SIZE
    protein = []
    for i in range(reading_frame, len(seq) - CODON_SIZE + 1, CODON_SIZE):
        codon = seq[i:i + CODON_SIZE]
        if codon in standard_rna_table.stop_codons:
            protein.append(STOP_AA)
        else:
            protein.append(standard_rna_table.forward_table.get(codon, UNKNOWN_AA))
    return ''.join(protein)
