import argparse

import pytest

from rdgraph.constants import (
    SUBCOMMAND,
    RdgNamespace,
    cast_boolean,
    float_fraction,
    normalize_sequence,
    translate,
)
from rdgraph.engine.constants import DEFAULTS, ModelParameters


class TestRdgNamespace:
    def test_add_and_define(self):
        nspace = RdgNamespace()
        nspace.add('thing', 1, defn='I am a thing')
        assert nspace.thing == 1
        assert nspace['thing'] == 1
        assert nspace.define('thing') == 'I am a thing'
        assert nspace.type('thing') == int
        assert 'thing' in nspace
        assert 'other' not in nspace
        assert nspace.items() == [('thing', 1)]

    def test_define_default(self):
        nspace = RdgNamespace(thing=1)
        assert nspace.define('thing', '') == ''
        with pytest.raises(KeyError):
            nspace.define('thing')

    def test_type(self):
        nspace = RdgNamespace()
        nspace.add('flag', False)
        nspace.add('fraction', 0.5, cast_type=float_fraction)
        assert nspace.type('flag') == cast_boolean
        assert nspace.type('fraction') == float_fraction
        assert nspace.type('missing', str) == str
        with pytest.raises(KeyError):
            nspace.type('missing')

    def test_respecify(self):
        nspace = RdgNamespace(thing=1)
        with pytest.raises(AttributeError):
            nspace.add('thing', 2)
        with pytest.raises(AttributeError):
            nspace.add('_private', 2)
        with pytest.raises(AttributeError):
            nspace.thing = 2
        assert nspace.thing == 1

    def test_missing_attribute(self):
        with pytest.raises(AttributeError):
            SUBCOMMAND.PLOT

    def test_enforce(self):
        assert SUBCOMMAND.enforce('draw') == 'draw'
        with pytest.raises(KeyError):
            SUBCOMMAND.enforce('plot')
        with pytest.raises(TypeError):
            SUBCOMMAND('plot')

    def test_keys_in_order(self):
        assert list(SUBCOMMAND) == ['ANALYZE', 'DRAW', 'ASSEMBLE', 'CONTROLS']
        assert SUBCOMMAND.values() == ['analyze', 'draw', 'assemble', 'controls']

    def test_env_overwrite(self, monkeypatch):
        monkeypatch.setenv('RDG_BASEP', '0.7')
        assert DEFAULTS.baseP == 0.7
        assert ModelParameters().baseP == 0.7
        monkeypatch.delenv('RDG_BASEP')
        assert DEFAULTS.baseP == 0.9

    def test_env_overwrite_bool(self, monkeypatch):
        nspace = RdgNamespace()
        nspace.add('verbose', False, env_overwritable=True)
        nspace.add('quiet', False)
        monkeypatch.setenv('RDG_VERBOSE', 'yes')
        monkeypatch.setenv('RDG_QUIET', 'yes')
        assert nspace.verbose is True
        assert nspace.quiet is False


class TestCasting:
    def test_cast_boolean(self):
        assert cast_boolean('yes')
        assert not cast_boolean('F')
        with pytest.raises(TypeError):
            cast_boolean('maybe')

    def test_float_fraction(self):
        assert float_fraction('0.25') == 0.25
        with pytest.raises(argparse.ArgumentTypeError):
            float_fraction('1.1')
        with pytest.raises(argparse.ArgumentTypeError):
            float_fraction('x')


class TestSequence:
    def test_normalize(self):
        assert normalize_sequence('atg tt\nc') == 'AUGUUC'

    def test_translate(self):
        assert translate('AUGGCUUAA') == 'MA*'
        assert translate('GAUGGCUUAA', 1) == 'MA*'


class TestModelParameters:
    def test_defaults(self):
        params = ModelParameters()
        assert params.to_dict() == {
            'baseP': 0.9,
            'nearCognatePenalty': 0.5,
            'distanceD0': 40.0,
            'gcBonus': 0.3,
            'reinitiationBase': 0.3,
            'lengthL0': 100.0,
            'spacingS0': 50.0,
            'gc_window': 30,
            'translon_limit': 12,
        }

    def test_unrecognized(self):
        with pytest.raises(KeyError):
            ModelParameters(baseQ=1)

    def test_copy_does_not_modify(self):
        params = ModelParameters(baseP=0.8)
        other = params.copy(gcBonus=0)
        assert params.gcBonus == 0.3
        assert other.gcBonus == 0
        assert other.baseP == 0.8
        assert params != other

    def test_resolve(self):
        params = ModelParameters(baseP=0.8)
        assert ModelParameters.resolve(params) is params
        assert ModelParameters.resolve({'baseP': 0.8}) == params
        assert ModelParameters.resolve(None) == ModelParameters()
