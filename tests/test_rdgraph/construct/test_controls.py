from rdgraph.construct.controls import ControlConstruct, apply_mutations, generate_controls, mutate_codon
from rdgraph.engine.features import identify_features

from ..mock import MAIN_POS, UORF_POS, UORF_SEQUENCE


class TestMutateCodon:
    def test_mutate(self):
        assert mutate_codon('AUGAUGAUG', 3, 'AAG') == 'AUGAAGAUG'

    def test_apply_mutations(self):
        assert apply_mutations('AUGAUGAUG', {0: 'AAG', 6: 'UAA'}) == 'AAGAUGUAA'
        assert apply_mutations('AUGAUGAUG', {}) == 'AUGAUGAUG'


class TestGenerateControls:
    def test_main_orf(self):
        features = identify_features(UORF_SEQUENCE)
        controls = generate_controls(UORF_SEQUENCE, features, 'test', MAIN_POS)
        assert controls == [
            ControlConstruct('test - Test'),
            ControlConstruct('test - Initiation(-) AAG', {MAIN_POS: 'AAG'}),
            ControlConstruct('test - Early Stop', {31: 'UAA'}),
            ControlConstruct('test - Upstream(-)', {UORF_POS: 'AAG'}),
        ]

    def test_no_upstream_aug(self):
        features = identify_features(UORF_SEQUENCE)
        controls = generate_controls(UORF_SEQUENCE, features, 'uorf', UORF_POS)
        assert [c.label for c in controls] == ['uorf - Test', 'uorf - Initiation(-) AAG', 'uorf - Early Stop']
        assert controls[2].mutations == {5: 'UAA'}

    def test_early_stop_within_long_orf(self):
        seq = 'AUG' + 'GCC' * 40 + 'UAA'
        controls = generate_controls(seq, identify_features(seq), 'long', 0)
        assert controls[2].mutations == {30: 'UAA'}

    def test_target_not_a_start(self):
        features = identify_features(UORF_SEQUENCE)
        controls = generate_controls(UORF_SEQUENCE, features, 'test', 10)
        assert controls[2].mutations == {31: 'UAA'}

    def test_mutated_sequences(self):
        features = identify_features(UORF_SEQUENCE)
        controls = generate_controls(UORF_SEQUENCE, features, 'test', MAIN_POS)
        negative = apply_mutations(UORF_SEQUENCE, controls[1].mutations)
        assert len(negative) == len(UORF_SEQUENCE)
        assert negative[MAIN_POS:MAIN_POS + 3] == 'AAG'
        assert identify_features(negative).canonical.start.pos == UORF_POS

    def test_invalid_input(self):
        assert generate_controls(UORF_SEQUENCE, None, 'test', MAIN_POS) == []
        assert generate_controls(UORF_SEQUENCE, identify_features(UORF_SEQUENCE), 'test', '19') == []

    def test_flatten(self):
        control = ControlConstruct('x - Upstream(-)', {12: 'AAG', 3: 'AAG'})
        assert control.flatten() == {'label': 'x - Upstream(-)', 'mutations': '3:AAG;12:AAG'}
