import os

import pytest

from rdgraph.error import InputFormatError
from rdgraph.main import main

from ..util import get_data, glob_exists


def read_tabbed(filename):
    with open(filename) as fh:
        lines = fh.read().strip().split('\n')
    header = lines[0][1:].split('\t')
    return [dict(zip(header, line.split('\t'))) for line in lines[1:]]


@pytest.fixture
def output_dir(tmp_path):
    return str(tmp_path / 'output')


class TestAnalyze:
    def test_analyze(self, output_dir):
        main(['analyze', '-n', get_data('uorf_reporter.fa'), '-o', output_dir])
        assert glob_exists(output_dir, 'translons.tab')
        assert glob_exists(output_dir, 'start_codons.tab')
        assert glob_exists(output_dir, 'features.json')
        rows = read_tabbed(os.path.join(output_dir, 'translons.tab'))
        assert [(r['name'], r['start_nt'], r['classification']) for r in rows] == [
            ('T1', '19', 'canonical'), ('T2', '2', 'uORF')]
        starts = read_tabbed(os.path.join(output_dir, 'start_codons.tab'))
        assert [s['pos'] for s in starts] == ['2', '19']

    def test_limit_and_config(self, output_dir):
        main([
            'analyze', '-n', get_data('uorf_reporter.fa'), '-o', output_dir,
            '--config', get_data('config.json'), '--limit', '1'
        ])
        rows = read_tabbed(os.path.join(output_dir, 'translons.tab'))
        assert len(rows) == 1

    def test_readthrough(self, output_dir, tmp_path):
        seq_file = tmp_path / 'rt.txt'
        seq_file.write_text('ATGGCCTAAGCCTAGG\n')
        main(['analyze', '-n', str(seq_file), '-o', output_dir, '--readthrough', '6:0.2'])
        rows = read_tabbed(os.path.join(output_dir, 'translons.tab'))
        assert rows[0]['end_nt'] == '15'

    def test_bad_input(self, output_dir, tmp_path):
        seq_file = tmp_path / 'empty.txt'
        seq_file.write_text('\n')
        with pytest.raises(InputFormatError):
            main(['analyze', '-n', str(seq_file), '-o', output_dir])


class TestDraw:
    def test_draw(self, output_dir):
        main(['draw', '-n', get_data('uorf_reporter.fa'), '-o', output_dir, '--frameshift', '10:-1'])
        svg_file = os.path.join(output_dir, 'rdg.svg')
        assert glob_exists(svg_file)
        with open(svg_file) as fh:
            assert 'class="translation"' in fh.read()

    def test_draw_construct(self, output_dir):
        main(['draw', '-n', get_data('uorf_reporter.fa'), '-o', output_dir, '--regions', get_data('regions.json')])
        with open(os.path.join(output_dir, 'rdg.svg')) as fh:
            assert 'class="construct_regions"' in fh.read()

    def test_extends_width_to_fit(self, output_dir):
        main(['draw', '-n', get_data('uorf_reporter.fa'), '-o', output_dir, '--width', '150', '--margin', '50'])
        assert glob_exists(output_dir, 'rdg.svg')


class TestAssemble:
    def test_assemble(self, output_dir):
        main(['assemble', '-n', get_data('uorf_reporter.fa'), '-o', output_dir, '--regions', get_data('regions.json')])
        with open(os.path.join(output_dir, 'construct.fa')) as fh:
            lines = fh.read().strip().split('\n')
        assert lines[0] == '>uorf_reporter_construct'
        sequence = ''.join(lines[1:])
        assert sequence.startswith('CCAUGUAAGGGGGGGGACCAUGGCCGAGAAGGGCCAGCCCGGCGGC')
        regions = read_tabbed(os.path.join(output_dir, 'regions.tab'))
        assert [r['type'] for r in regions] == ['5UTR', 'RLUC_NO_STOP', 'LINKER', 'FLUC']
        assert regions[-1]['end'] == str(len(sequence))

    def test_regions_required(self, output_dir):
        with pytest.raises(SystemExit):
            main(['assemble', '-n', get_data('uorf_reporter.fa'), '-o', output_dir])


class TestControls:
    def test_controls(self, output_dir):
        main(['controls', '-n', get_data('uorf_reporter.fa'), '-o', output_dir, '--target_pos', '19'])
        rows = read_tabbed(os.path.join(output_dir, 'controls.tab'))
        assert [r['label'] for r in rows] == [
            'uorf_reporter - Test',
            'uorf_reporter - Initiation(-) AAG',
            'uorf_reporter - Early Stop',
            'uorf_reporter - Upstream(-)',
        ]
        assert rows[0]['mutations'] == ''
        assert rows[1]['sequence'][19:22] == 'AAG'

    def test_target_name(self, output_dir):
        main([
            'controls', '-n', get_data('uorf_reporter.fa'), '-o', output_dir,
            '--target_pos', '2', '--target_name', 'uORF1'
        ])
        rows = read_tabbed(os.path.join(output_dir, 'controls.tab'))
        assert rows[0]['label'] == 'uORF1 - Test'
        assert len(rows) == 3
