import argparse
import json

from jsonschema import ValidationError

from .constants import CODON_SIZE, cast_boolean, float_fraction
from .construct.assemble import RegionSpec
from .engine.base import FrameshiftSite, ReadthroughStop
from .engine.constants import DEFAULTS as MODEL_DEFAULTS, ModelParameters
from .error import InputFormatError
from .illustrate.constants import DEFAULTS as ILLUSTRATION_DEFAULTS
from .schemas import validate as validate_schema
from .util import cast, filepath, logger

CONFIG_SECTIONS = {'model': MODEL_DEFAULTS, 'illustrate': ILLUSTRATION_DEFAULTS}


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _format_args(self, action, default_metavar):
        if action.metavar is None:
            action.metavar = get_metavar(action.type)
        return super(CustomHelpFormatter, self)._format_args(action, default_metavar)

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(bool)
        '{True,False}'
    """
    if arg_type in [bool, cast_boolean]:
        return '{True,False}'
    elif arg_type in [float_fraction, float]:
        return 'FLOAT'
    elif arg_type == int:
        return 'INT'
    elif arg_type == filepath:
        return 'FILEPATH'
    elif arg_type == readthrough_stop:
        return 'POS:PROB'
    elif arg_type == frameshift_site:
        return 'POS:SHIFT'
    return None


def readthrough_stop(value):
    """
    parse a readthrough stop given as a position optionally followed by the readthrough probability

    Example:
        >>> readthrough_stop('12:0.3')
        ReadthroughStop(pos=12, frame=0, probability=0.3)
    """
    pos, sep, prob = str(value).partition(':')
    try:
        pos = int(pos)
        if pos < 0:
            raise ValueError('position must be non-negative', pos)
        if sep:
            return ReadthroughStop.from_position(pos, float_fraction(prob))
        return ReadthroughStop.from_position(pos)
    except ValueError:
        raise argparse.ArgumentTypeError('expected a position or position:probability', value)


def augment_parser(arguments, parser):
    """
    add arguments for model and illustration defaults to a parser (or argument group). The default,
    type and help are taken from the namespace the argument is defined in
    """
    for arg in arguments:
        for defaults in CONFIG_SECTIONS.values():
            if arg in defaults:
                break
        else:
            raise KeyError('invalid argument', arg)
        value_type = defaults.type(arg, type(defaults[arg]))
        parser.add_argument(
            '--{}'.format(arg), default=argparse.SUPPRESS, type=value_type, metavar=get_metavar(value_type),
            help='{} (default: {})'.format(defaults.define(arg, '').replace('%', '%%'), repr(defaults[arg])))


def read_json_input(path, schema):
    """
    read a JSON input file and check it against the bundled schema of the same kind

    Raises:
        InputFormatError: the file is not valid JSON or does not conform to the schema
    """
    try:
        with open(path, 'r') as fh:
            content = json.load(fh)
    except json.JSONDecodeError as err:
        raise InputFormatError(f'could not parse the {schema} file', path, str(err))
    try:
        validate_schema(content, schema)
    except ValidationError as err:
        short_msg = '. '.join(
            [line for line in str(err).split('\n') if line.strip()][:3]
        )  # these can get super long
        raise InputFormatError(f'the {schema} file does not match the expected format', path, short_msg)
    return content


def load_config(path):
    """
    read a JSON configuration file. The file may contain a ``model`` section of model parameters and an
    ``illustrate`` section of drawing settings

    Returns:
        dict: the validated (and cast) overrides by section name

    Raises:
        InputFormatError: the file is not valid JSON or a section or setting is unrecognized or invalid
    """
    content = read_json_input(path, 'config')
    config = {section: {} for section in CONFIG_SECTIONS}
    for section, settings in content.items():
        defaults = CONFIG_SECTIONS[section]
        for attr, value in settings.items():
            config[section][attr] = cast(value, defaults.type(attr))
    logger.info(f'loaded config: {path}')
    return config


def merge_arguments(config, args):
    """
    override the config values with any model or illustration arguments given on the command line

    Returns:
        tuple of ModelParameters and dict: the model parameters and the drawing settings
    """
    model = dict(config.get('model', {}))
    illustrate = dict(config.get('illustrate', {}))
    for section, defaults in [(model, MODEL_DEFAULTS), (illustrate, ILLUSTRATION_DEFAULTS)]:
        for attr in defaults.keys():
            value = getattr(args, attr, None)
            if value is not None:
                section[attr] = value
    return ModelParameters(**model), illustrate


def frameshift_site(value):
    """
    parse a frameshift site given as a position and the shift

    Example:
        >>> frameshift_site('10:-1')
        FrameshiftSite(pos=10, from_frame=1, to_frame=0, shift=-1)
    """
    try:
        pos, shift = [int(v) for v in str(value).split(':')]
        if pos < 0:
            raise ValueError('position must be non-negative', pos)
    except ValueError:
        raise argparse.ArgumentTypeError('expected position:shift', value)
    return FrameshiftSite(pos, pos % CODON_SIZE, (pos + shift) % CODON_SIZE, shift)


def load_regions(path):
    """
    read construct region specifications from a JSON file. The file contains either a list of region
    specifications or an object with a ``regions`` list and an optional ``reporter_sequences`` mapping of
    region type to coding sequence

    Returns:
        tuple of list and dict: the region specifications and the reporter sequences

    Raises:
        InputFormatError: the file does not match the expected format
    """
    content = read_json_input(path, 'regions')
    reporter_sequences = {}
    if isinstance(content, dict):
        reporter_sequences = content.get('reporter_sequences', {})
        content = content['regions']
    return [RegionSpec.from_mapping(spec) for spec in content], reporter_sequences
