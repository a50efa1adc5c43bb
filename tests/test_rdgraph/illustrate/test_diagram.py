import pytest
from svgwrite import Drawing

from rdgraph.construct.assemble import assemble_construct
from rdgraph.engine.base import FrameshiftSite, ReadthroughStop
from rdgraph.engine.features import identify_features
from rdgraph.engine.translon import build_translons
from rdgraph.error import DrawingFitError
from rdgraph.illustrate.constants import DEFAULTS, DiagramSettings
from rdgraph.illustrate.diagram import draw_tree_layout
from rdgraph.illustrate.layout import calculate_tree_layout
from rdgraph.illustrate.util import (
    HEX_BLACK,
    HEX_WHITE,
    PixelMapping,
    abundance_fill,
    dynamic_label_color,
    nt_to_pixel,
)

from ..mock import READTHROUGH_SEQUENCE, UORF_SEQUENCE


def draw(sequence, settings=None, readthrough_stops=None, frameshift_sites=None, regions=None):
    settings = DiagramSettings() if settings is None else settings
    features = identify_features(sequence)
    layout = calculate_tree_layout(
        build_translons(sequence, features=features), sequence, readthrough_stops, frameshift_sites, settings)
    return draw_tree_layout(
        settings, layout, sequence, start_codons=features.predicted.start_codons, regions=regions,
        readthrough_stops=readthrough_stops)


class TestDrawTreeLayout:
    def test_draw(self):
        canvas = draw(UORF_SEQUENCE)
        assert isinstance(canvas, Drawing)
        assert canvas.attribs['width'] == DEFAULTS.width
        assert canvas.attribs['height'] == 280 + 40
        svg = canvas.tostring()
        assert 'class="translation"' in svg
        assert 'class="reinitiation"' in svg
        assert 'class="start_codon"' in svg
        assert 'class="stop_codon"' in svg
        assert '>T1<' in svg
        assert '>T2<' in svg

    def test_empty_layout_height(self):
        canvas = draw('GGGCCCGGG')
        assert canvas.attribs['height'] == 200 + 40

    def test_readthrough(self):
        canvas = draw(READTHROUGH_SEQUENCE, readthrough_stops=[ReadthroughStop.from_position(6, 0.25)])
        svg = canvas.tostring()
        assert 'class="readthrough"' in svg
        assert 'class="readthrough_decision"' in svg
        assert 'class="readthrough_stop"' in svg
        assert 'RT 25%' in svg

    def test_frameshift(self):
        svg = draw(UORF_SEQUENCE, frameshift_sites=[FrameshiftSite(10, 1, 0, -1)]).tostring()
        assert 'class="frameshift"' in svg
        assert 'FS-1' in svg

    def test_construct_regions(self):
        construct = assemble_construct(UORF_SEQUENCE, [{'type': '5UTR', 'start': 1, 'end': 19}, {'type': 'RLUC'}])
        svg = draw(construct.sequence, regions=construct.regions).tostring()
        assert 'class="construct_regions"' in svg
        assert 'RLUC (Frame 1)' in svg

    def test_drawing_fit_error(self):
        with pytest.raises(DrawingFitError):
            draw(UORF_SEQUENCE, DiagramSettings(width=150, margin=50))

    def test_saveas(self, tmp_path):
        output = tmp_path / 'rdg.svg'
        draw(UORF_SEQUENCE).saveas(str(output))
        assert output.read_text().startswith('<?xml')


class TestDiagramSettings:
    def test_defaults(self):
        settings = DiagramSettings()
        assert settings.width == 1000
        assert settings.half_branch_spacing == 40
        assert settings.frame_colors == ['#10b981', '#3b82f6', '#f59e0b']
        assert len(settings.frame_fill_gradient) == 3
        assert len(settings.frame_fill_gradient[0]) == settings.abundance_gradient_steps

    def test_override(self):
        assert DiagramSettings(width=1500).width == 1500

    def test_unrecognized_argument(self):
        with pytest.raises(KeyError):
            DiagramSettings(height=100)


class TestPixelMapping:
    def test_nt_to_pixel(self):
        assert nt_to_pixel(50, 100, 1000, 50) == 500
        assert nt_to_pixel(0, 100, 1000, 50) == 50
        assert nt_to_pixel(100, 100, 1000, 50) == 950
        assert nt_to_pixel(10, 0, 1000, 50) == 50

    def test_round_trip(self):
        mapping = PixelMapping(100, 1000, 50)
        assert mapping.drawable_width == 900
        assert mapping.nt_width() == 9
        assert mapping.convert_pixel(mapping.convert_pos(50)) == 50
        assert mapping.convert_pixel(50) == 0

    def test_empty_sequence(self):
        mapping = PixelMapping(0, 1000, 50)
        assert mapping.nt_width() == 0
        assert mapping.convert_pos(10) == 50

    def test_from_settings(self):
        mapping = PixelMapping.from_settings(DiagramSettings(), 34)
        assert (mapping.seq_length, mapping.width, mapping.margin) == (34, 1000, 50)
        with pytest.raises(DrawingFitError):
            PixelMapping.from_settings(DiagramSettings(width=199, margin=50), 34)


class TestColors:
    def test_dynamic_label_color(self):
        assert dynamic_label_color(HEX_BLACK) == HEX_WHITE
        assert dynamic_label_color(HEX_WHITE) == HEX_BLACK

    def test_abundance_fill(self):
        settings = DiagramSettings()
        assert abundance_fill(settings, 0, 1) == settings.frame_fill_gradient[0][-1]
        assert abundance_fill(settings, 1, 0) == settings.frame_fill_gradient[1][0]
        assert abundance_fill(settings, 2, 5) == settings.frame_fill_gradient[2][-1]
        assert abundance_fill(settings, 0, 0.95) != abundance_fill(settings, 0, 0.05)
