#!python
import argparse
import json
import logging
import os
import platform
import sys
import time
from typing import List, Optional

from . import __version__
from . import config as _config
from . import util as _util
from .constants import PROGNAME, SUBCOMMAND
from .construct.assemble import assemble_construct
from .construct.controls import apply_mutations, generate_controls
from .engine.constants import DEFAULTS as MODEL_DEFAULTS
from .engine.features import identify_features
from .engine.translon import build_translons, predict_protein_products
from .error import DrawingFitError
from .illustrate.constants import DiagramSettings
from .illustrate.diagram import draw_tree_layout
from .illustrate.layout import calculate_tree_layout

TRANSLON_COLUMNS = [
    'name', 'start_nt', 'end_nt', 'frame', 'start_codon', 'classification', 'predicted_abundance',
    'initiation_probability', 'predicted_protein_size_kda', 'orf_length', 'kozak_score', 'gc_content',
]
START_CODON_COLUMNS = [
    'pos', 'codon', 'frame', 'is_canonical', 'stop_pos', 'orf_length', 'aa_length', 'kozak_score',
    'gc_content', 'initiation_probability',
]


def analyze_main(sequence, output, params, limit=None, ensure_starts=None, readthrough_stops=None, **kwargs):
    """
    computes the features and translons of a sequence and writes them to the output directory
    """
    features = identify_features(sequence, readthrough_stops, params)
    translons = build_translons(
        sequence, limit=limit, features=features, params=params, ensure_starts=ensure_starts)

    _util.output_tabbed_file(translons, os.path.join(output, 'translons.tab'), header=TRANSLON_COLUMNS)
    _util.output_tabbed_file(
        features.predicted.start_codons, os.path.join(output, 'start_codons.tab'), header=START_CODON_COLUMNS)
    features_file = os.path.join(output, 'features.json')
    _util.logger.info(f'writing: {features_file}')
    with open(features_file, 'w') as fh:
        fh.write(json.dumps(features.to_dict(), sort_keys=True, indent='  '))
    return translons


def draw_main(
    sequence, output, params, settings, limit=None, ensure_starts=None, readthrough_stops=None,
    frameshift_sites=None, regions=None, reporter_sequences=None, **kwargs
):
    """
    draws the decision graph of a sequence (or the construct assembled from it) as svg
    """
    construct_regions = None
    if regions:
        construct = assemble_construct(sequence, regions, reporter_sequences)
        sequence, construct_regions = construct.sequence, construct.regions

    features = identify_features(sequence, readthrough_stops, params)
    translons = build_translons(
        sequence, limit=limit, features=features, params=params, ensure_starts=ensure_starts)
    if construct_regions:
        for product in predict_protein_products(translons, construct_regions):
            _util.logger.info(
                f'{product.name} ({product.start_pos}-{product.end_pos}): {product.mw} kDa '
                f'reporters={product.reporters} abundance={product.abundance:.3f}')

    layout = calculate_tree_layout(translons, sequence, readthrough_stops, frameshift_sites, settings)
    canvas = None
    attempts = 1
    while True:
        try:
            canvas = draw_tree_layout(
                settings, layout, sequence,
                start_codons=features.predicted.start_codons,
                regions=construct_regions,
                readthrough_stops=readthrough_stops
            )
            break
        except DrawingFitError as err:
            if attempts > settings.max_drawing_retries:
                raise err
            _util.logger.info(f'Drawing fit: extending window {settings.drawing_width_iter_increase}')
            settings.width += settings.drawing_width_iter_increase
            attempts += 1

    svg_output_file = os.path.join(output, 'rdg.svg')
    _util.logger.info(f'writing: {svg_output_file}')
    canvas.saveas(svg_output_file)
    return layout


def assemble_main(sequence, name, output, regions, reporter_sequences=None, **kwargs):
    """
    assembles a construct from the region specifications and writes its sequence and regions
    """
    construct = assemble_construct(sequence, regions, reporter_sequences)
    _util.write_fasta_file(os.path.join(output, 'construct.fa'), [(f'{name}_construct', construct.sequence)])
    _util.output_tabbed_file(construct.regions, os.path.join(output, 'regions.tab'))
    return construct


def controls_main(sequence, name, output, params, target_pos, target_name=None, readthrough_stops=None, **kwargs):
    """
    generates the control constructs for a target start codon
    """
    features = identify_features(sequence, readthrough_stops, params)
    controls = generate_controls(sequence, features, target_name or name, target_pos)
    if not controls:
        _util.logger.warning(f'no controls generated for the target start at {target_pos}')
    rows = []
    for control in controls:
        row = control.flatten()
        row['sequence'] = apply_mutations(sequence, control.mutations)
        rows.append(row)
    _util.output_tabbed_file(rows, os.path.join(output, 'controls.tab'), header=['label', 'mutations', 'sequence'])
    return controls


def create_parser(argv):
    parser = argparse.ArgumentParser(prog=PROGNAME, formatter_class=_config.CustomHelpFormatter)
    parser.add_argument(
        '-v', '--version', action='version', version='%(prog)s version ' + __version__,
        help='Outputs the version number')
    subp = parser.add_subparsers(dest='command', help='specifies which subprogram to use')
    subp.required = True
    required = {}  # hold required argument group by subparser command name
    optional = {}  # hold optional argument group by subparser command name
    for command in SUBCOMMAND.values():
        subparser = subp.add_parser(command, formatter_class=_config.CustomHelpFormatter, add_help=False)
        required[command] = subparser.add_argument_group('required arguments')
        optional[command] = subparser.add_argument_group('optional arguments')
        optional[command].add_argument('-h', '--help', action='help', help='show this help message and exit')
        optional[command].add_argument(
            '-v', '--version', action='version', version='%(prog)s version ' + __version__,
            help='Outputs the version number')
        optional[command].add_argument('--log', help='redirect stdout to a log file', default=None)
        optional[command].add_argument(
            '--log_level', help='level of logging to output', choices=['INFO', 'DEBUG'], default='INFO')
        optional[command].add_argument(
            '--config', '-c', help='path to the JSON config file', type=_util.filepath, default=None)
        required[command].add_argument(
            '-n', '--input', help='path to the input sequence (FASTA or raw)', required=True, type=_util.filepath)
        required[command].add_argument('-o', '--output', help='path to the output directory', required=True)

    for command in [SUBCOMMAND.ANALYZE, SUBCOMMAND.DRAW, SUBCOMMAND.CONTROLS]:
        optional[command].add_argument(
            '--readthrough', dest='readthrough_stops', type=_config.readthrough_stop, action='append', default=[],
            help='stop codon (by position) which ribosomes may read through, optionally with the readthrough probability')
        _config.augment_parser([k for k in MODEL_DEFAULTS.keys() if k != 'translon_limit'], optional[command])

    for command in [SUBCOMMAND.ANALYZE, SUBCOMMAND.DRAW]:
        optional[command].add_argument(
            '--limit', type=int, default=None,
            help='the maximum number of translons to report (default: {})'.format(MODEL_DEFAULTS.translon_limit))
        optional[command].add_argument(
            '--ensure_start', dest='ensure_starts', type=int, action='append', default=[],
            help='position of a start codon to include regardless of the limit')

    # draw
    _config.augment_parser(
        ['width', 'margin', 'rail_y', 'branch_spacing', 'drawing_width_iter_increase', 'max_drawing_retries'],
        optional[SUBCOMMAND.DRAW])
    optional[SUBCOMMAND.DRAW].add_argument(
        '--frameshift', dest='frameshift_sites', type=_config.frameshift_site, action='append', default=[],
        help='frameshift site to mark on the diagram')
    optional[SUBCOMMAND.DRAW].add_argument(
        '--regions', type=_util.filepath, default=None,
        help='JSON file of construct regions. When given the assembled construct is drawn')

    # assemble
    required[SUBCOMMAND.ASSEMBLE].add_argument(
        '--regions', type=_util.filepath, required=True, help='JSON file of construct regions')

    # controls
    required[SUBCOMMAND.CONTROLS].add_argument(
        '--target_pos', type=int, required=True, help='position of the target start codon')
    optional[SUBCOMMAND.CONTROLS].add_argument(
        '--target_name', default=None, help='name used to label the controls (defaults to the sequence name)')

    return parser, parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """
    sets up the parser and checks the validity of command line args
    loads the input files and redirects into subcommand main functions

    Args:
        argv: List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    log_conf = {'format': '{asctime} [{levelname}] {message}', 'style': '{', 'level': args.log_level}

    original_logging_handlers = logging.root.handlers[:]
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    if args.log:  # redirect stdout AND stderr to a log file
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.logger.info(f'RDGRAPH: {__version__}')
    _util.logger.info(f'hostname: {platform.node()}')
    _util.log_arguments(args)

    try:
        config = _config.load_config(args.config) if args.config else {}
        params, illustrate = _config.merge_arguments(config, args)
        name, sequence = _util.read_sequence_file(args.input)

        regions, reporter_sequences = None, None
        if getattr(args, 'regions', None):
            regions, reporter_sequences = _config.load_regions(args.regions)

        _util.mkdirp(args.output)
        command = args.command
        kwargs = dict(
            sequence=sequence,
            name=name,
            output=args.output,
            params=params,
            limit=getattr(args, 'limit', None),
            ensure_starts=getattr(args, 'ensure_starts', []),
            readthrough_stops=getattr(args, 'readthrough_stops', []),
            regions=regions,
            reporter_sequences=reporter_sequences,
        )
        if command == SUBCOMMAND.ANALYZE:
            analyze_main(**kwargs)
        elif command == SUBCOMMAND.DRAW:
            draw_main(
                settings=DiagramSettings(**illustrate),
                frameshift_sites=args.frameshift_sites,
                **kwargs)
        elif command == SUBCOMMAND.ASSEMBLE:
            assemble_main(**kwargs)
        else:
            controls_main(target_pos=args.target_pos, target_name=args.target_name, **kwargs)

        duration = int(time.time()) - start_time
        _util.logger.info(f'run time (s): {duration}')
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)


if __name__ == '__main__':
    main()
