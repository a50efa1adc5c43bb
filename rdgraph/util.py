import errno
from glob import glob
import logging
import os

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord
from braceexpand import braceexpand

from .constants import RdgNamespace, cast_boolean, normalize_sequence
from .error import InputFormatError

logger = logging.getLogger('rdgraph')


def cast(value, cast_func):
    """
    cast a value to a given type

    Example:
        >>> cast('1', int)
        1
    """
    if cast_func == bool:
        value = cast_boolean(value)
    else:
        value = cast_func(value)
    return value


class WeakRdgNamespace(RdgNamespace):

    def is_env_overwritable(self, attr):
        return True


def bash_expands(*expressions):
    """
    expand a file glob expression, allowing bash-style brackets.

    Returns:
        list: a list of files

    Example:
        >>> bash_expands('./{test,doc}/*py')
        [...]
    """
    result = []
    for expression in expressions:
        eresult = []
        for name in braceexpand(expression):
            for fname in glob(name):
                eresult.append(fname)
        if not eresult:
            raise FileNotFoundError('The expression does not match any files', expression)
        result.extend(eresult)
    return [os.path.abspath(f) for f in result]


def filepath(path):
    try:
        file_list = bash_expands(path)
    except FileNotFoundError:
        raise TypeError('File does not exist', path)
    else:
        if len(file_list) > 1:
            raise TypeError('File pattern match multiple files and expected only one', path)
    return file_list[0]


def log_arguments(args):
    """
    output the arguments to the console

    Args:
        args (Namespace): the namespace to print arguments for
    """
    logger.info('arguments')

    indent = ' '

    for arg, val in sorted(args.__dict__.items()):
        if isinstance(val, list):
            if len(val) <= 1:
                logger.info(f'{indent}{arg} = {val}')
                continue
            logger.info(f'{indent}{arg} = [')
            for v in val:
                logger.info(f'{indent * 2}{repr(v)}')
            logger.info(f'{indent}]')
        elif any([isinstance(val, typ) for typ in [str, int, float, bool, tuple]]) or val is None:
            logger.info(f'{indent}{arg} = {repr(val)}')
        else:
            logger.info(f'{indent}{arg} = {object.__repr__(val)}')


def mkdirp(dirname):
    """
    Make a directory or path of directories. Suppresses the error that is normally raised when the directory already exists
    """
    logger.info(f"creating output directory: '{dirname}'")
    try:
        os.makedirs(dirname)
    except OSError as exc:
        if exc.errno == errno.EEXIST and os.path.isdir(dirname):
            pass
        else:
            raise exc
    return dirname


def output_tabbed_file(rows, filename, header=None):
    """
    write a list of rows to a tab delimited file with a commented header line

    Args:
        rows (list): list of dictionaries or objects with a flatten method
        filename (str): path to the output file
        header (list): the columns to output (defaults to all columns, sorted)
    """
    if header is None:
        custom_header = False
        header = set()
    else:
        custom_header = True
    flat_rows = []
    for row in rows:
        if not isinstance(row, dict):
            row = row.flatten()
        flat_rows.append(row)
        if not custom_header:
            header.update(row.keys())
    if not custom_header:
        header = sorted(header)

    with open(filename, 'w') as fh:
        logger.info(f'writing: {filename}')
        fh.write('#' + '\t'.join(header) + '\n')
        for row in flat_rows:
            fh.write('\t'.join([str(row.get(c, None)) for c in header]) + '\n')


def write_fasta_file(filename, records):
    """
    Args:
        filename (str): path to the output file
        records (list of tuple of str and str): name and sequence pairs
    """
    logger.info(f'writing: {filename}')
    seq_records = [SeqRecord(Seq(seq), id=name, description='') for name, seq in records]
    with open(filename, 'w') as fh:
        SeqIO.write(seq_records, fh, 'fasta')


def read_sequence_file(filename):
    """
    read the first sequence from a FASTA file or, where the file is not FASTA, the whole file as a raw
    sequence. The sequence is converted to the upper case RNA alphabet

    Returns:
        tuple of str and str: the name and the sequence

    Raises:
        InputFormatError: the file does not contain a sequence
    """
    with open(filename, 'r') as fh:
        content = fh.read()
    if content.lstrip().startswith('>'):
        with open(filename, 'r') as fh:
            for record in SeqIO.parse(fh, 'fasta'):
                name, seq = record.id, normalize_sequence(record.seq)
                break
            else:
                raise InputFormatError('no sequence records found in the FASTA file', filename)
    else:
        name, seq = os.path.splitext(os.path.basename(filename))[0], normalize_sequence(content)
    if not seq:
        raise InputFormatError('the input sequence is empty', filename)
    if set(seq) - set('ACGU'):
        logger.warning(f'the sequence {name} contains characters other than A, C, G and U')
    logger.info(f'read sequence {name} ({len(seq)} nt) from {filename}')
    return name, seq
