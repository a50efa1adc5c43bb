import pytest

from rdgraph.constants import STOP_CODONS
from rdgraph.engine.base import ReadthroughStop, StopCodon
from rdgraph.engine.constants import ModelParameters
from rdgraph.engine.scan import (
    apply_frameshift,
    calculate_downstream_gc,
    calculate_kozak_score,
    find_next_stop_in_frame,
    find_start_codons,
    find_stop_codons,
    readthrough_positions,
)

from ..mock import READTHROUGH_SEQUENCE, SHORT_ORF, UORF_SEQUENCE, random_sequences


class TestKozakScore:
    def test_strong_context(self):
        assert calculate_kozak_score('ACCAUGG', 3) == 1.0

    def test_plus4_only(self):
        assert calculate_kozak_score('CCCAUGG', 3) == 0.4

    def test_minus3_only(self):
        assert calculate_kozak_score('GCCAUGA', 3) == 0.6

    def test_weak_context(self):
        assert calculate_kozak_score('CCCAUGC', 3) == 0

    def test_start_near_sequence_ends(self):
        assert calculate_kozak_score('AUG', 0) == 0
        assert calculate_kozak_score('GAUGG', 1) == 0.4


class TestDownstreamGC:
    def test_empty_window(self):
        assert calculate_downstream_gc('AUG', 0) == 0.5

    def test_full_gc(self):
        assert calculate_downstream_gc('AUGGGCC', 0) == 1.0

    def test_window_size(self):
        assert calculate_downstream_gc('AUGGCAAAA', 0, window_size=2) == 1.0
        assert calculate_downstream_gc('AUGGCAAAA', 0, window_size=4) == 0.5


class TestFindStartCodons:
    def test_canonical_orf(self):
        starts = find_start_codons(SHORT_ORF)
        aug = [s for s in starts if s.codon == 'AUG']
        assert len(aug) == 1
        aug = aug[0]
        assert aug.pos == 3
        assert aug.stop_pos == 15
        assert aug.orf_length == 12
        assert aug.frame == 0
        assert aug.is_canonical
        assert aug.kozak_score == 1.0

    def test_near_cognate_start(self):
        starts = find_start_codons(SHORT_ORF)
        assert [s.pos for s in starts] == [3, 7]
        cug = starts[1]
        assert cug.codon == 'CUG'
        assert not cug.is_canonical
        assert cug.frame == 1
        # no stop codon in frame 1
        assert cug.stop_pos == len(SHORT_ORF)
        assert cug.orf_length == len(SHORT_ORF) - 7

    def test_no_start_codons(self):
        assert find_start_codons('GGGCCCGGG') == []
        assert find_start_codons('') == []
        assert find_start_codons('AU') == []

    def test_initiation_probability_range(self):
        for start in find_start_codons(UORF_SEQUENCE):
            assert 0.01 <= start.initiation_probability <= 0.99

    def test_near_cognate_penalty(self):
        starts = find_start_codons(SHORT_ORF, params=ModelParameters(nearCognatePenalty=0.1))
        assert starts[1].initiation_probability < find_start_codons(SHORT_ORF)[1].initiation_probability

    def test_readthrough_extends_orf(self):
        assert find_start_codons(READTHROUGH_SEQUENCE)[0].stop_pos == 9
        starts = find_start_codons(READTHROUGH_SEQUENCE, [ReadthroughStop.from_position(6)])
        assert starts[0].stop_pos == 15
        assert starts[0].orf_length == 15

    def test_readthrough_as_mapping(self):
        starts = find_start_codons(READTHROUGH_SEQUENCE, [{'pos': 6}])
        assert starts[0].stop_pos == 15

    def test_flatten(self):
        row = find_start_codons(SHORT_ORF)[0].flatten()
        assert row['pos'] == 3
        assert row['aa_length'] == 4


class TestFindStopCodons:
    def test_all_frames(self):
        assert find_stop_codons(SHORT_ORF) == [StopCodon(12, 'UAA', 0)]
        stops = find_stop_codons(UORF_SEQUENCE)
        assert [(s.pos, s.frame) for s in stops] == [(5, 2), (31, 1)]

    def test_single_frame(self):
        assert [s.pos for s in find_stop_codons(UORF_SEQUENCE, 1)] == [31]
        assert find_stop_codons(UORF_SEQUENCE, 0) == []

    def test_overlapping_stops(self):
        stops = find_stop_codons('UAAUGA')
        assert [s.codon for s in stops] == ['UAA', 'UGA']


class TestFindNextStopInFrame:
    def test_after_readthrough(self):
        assert find_next_stop_in_frame('AUGUAAGGGUAG', 3, 0) == 12

    def test_no_stop(self):
        assert find_next_stop_in_frame('AUGGGGGGGGGG', 0, 0) == 12

    def test_skips_readthrough_stops(self):
        seq = 'AUGGCCUAAGCCUAGGCCUGA'
        assert find_next_stop_in_frame(seq, 6, 0) == 15
        assert find_next_stop_in_frame(seq, 6, 0, [ReadthroughStop.from_position(12)]) == 21

    def test_other_frame(self):
        assert find_next_stop_in_frame('GUAAUAGG', 0, 1) == 4


class TestReadthroughPositions:
    def test_mixed_input(self):
        assert readthrough_positions([ReadthroughStop.from_position(6), {'pos': 9}, {'frame': 1}]) == {6, 9}
        assert readthrough_positions(None) == set()


class TestApplyFrameshift:
    @pytest.mark.parametrize('position,shift,expected', [(10, -1, (9, 0)), (10, 1, (11, 2)), (0, 3, (3, 0))])
    def test_shift(self, position, shift, expected):
        assert apply_frameshift(position, shift) == expected


class TestRandomSequences:
    @pytest.mark.parametrize('seed', [1, 2, 3])
    def test_start_codon_orfs(self, seed):
        for seq, readthrough_stops in random_sequences(seed=seed):
            skip = readthrough_positions(readthrough_stops)
            for start in find_start_codons(seq, readthrough_stops):
                assert start.frame == start.pos % 3
                assert start.pos + 3 <= start.stop_pos <= len(seq)
                assert start.orf_length == start.stop_pos - start.pos
                assert 0.01 <= start.initiation_probability <= 0.99
                terminating = [
                    pos for pos in range(start.pos + 3, start.stop_pos - 2, 3)
                    if seq[pos:pos + 3] in STOP_CODONS and pos not in skip
                ]
                if start.stop_pos < len(seq):
                    assert terminating == [start.stop_pos - 3]
                else:
                    assert terminating in ([], [start.stop_pos - 3])

    @pytest.mark.parametrize('seed', [1, 2, 3])
    def test_readthrough_extends_orfs(self, seed):
        for seq, readthrough_stops in random_sequences(seed=seed):
            plain = {s.pos: s.stop_pos for s in find_start_codons(seq)}
            for start in find_start_codons(seq, readthrough_stops):
                assert start.stop_pos >= plain[start.pos]
