from colour import Color

from ..util import WeakRdgNamespace

DEFAULTS = WeakRdgNamespace()
"""
- :term:`width`
- :term:`margin`
- :term:`rail_y`
- :term:`branch_spacing`
- :term:`frame0_color`
- :term:`frame1_color`
- :term:`frame2_color`
- :term:`noncoding_color`
- :term:`reinitiation_color`
- :term:`readthrough_color`
- :term:`frameshift_color`
- :term:`start_color`
- :term:`near_cognate_color`
- :term:`stop_color`
- :term:`label_color`
- :term:`drawing_width_iter_increase`
- :term:`max_drawing_retries`
"""
DEFAULTS.add('width', 1000, defn='The drawing width in pixels')
DEFAULTS.add('margin', 50, defn='The horizontal margin (pixels) on either side of the sequence')
DEFAULTS.add('rail_y', 200, defn='The vertical position (pixels) of the scanning rail at the 5\' end')
DEFAULTS.add(
    'branch_spacing', 80,
    defn='The vertical distance (pixels) between the translation row and the continued scanning rail of a decision point')
DEFAULTS.add('frame0_color', '#10b981', defn='The color of reading frame 0')
DEFAULTS.add('frame1_color', '#3b82f6', defn='The color of reading frame 1')
DEFAULTS.add('frame2_color', '#f59e0b', defn='The color of reading frame 2')
DEFAULTS.add('noncoding_color', '#999999', defn='The color of the scanning rail')
DEFAULTS.add('reinitiation_color', '#8b5cf6', defn='The color of reinitiation paths')
DEFAULTS.add('readthrough_color', '#f59e0b', defn='The color of readthrough stop markers')
DEFAULTS.add('frameshift_color', '#8b5cf6', defn='The color of frameshift markers')
DEFAULTS.add('start_color', '#059669', defn='The color of AUG start codon ticks')
DEFAULTS.add('near_cognate_color', '#34d399', defn='The color of near-cognate start codon ticks')
DEFAULTS.add('stop_color', '#dc2626', defn='The color of stop codon ticks')
DEFAULTS.add('label_color', '#64748b', defn='The label color')
DEFAULTS.add(
    'drawing_width_iter_increase', 500,
    defn='The amount (in pixels) by which to increase the drawing width upon failure to fit')
DEFAULTS.add(
    'max_drawing_retries', 5,
    defn='The maximum number of retries for attempting a drawing. Each iteration the width is extended')


class DiagramSettings:
    """
    holds settings related to colors/sizes for the drawing and the layout
    """
    def __init__(self, **kwargs):
        inputs = {}
        inputs.update(DEFAULTS.items())
        inputs.update(kwargs)
        for arg, val in inputs.items():
            if arg not in DEFAULTS:
                raise KeyError('unrecognized argument', arg)
            setattr(self, arg, val)
        self.min_width = 100  # the sequence must be drawn at least this wide
        self.top_margin = 20

        self.region_track_y = 20
        self.region_track_height = 40
        self.region_opacity = 0.15
        self.reporter_opacity = 0.4

        self.frame_track_y = [80, 110, 140]
        self.frame_track_height = 20
        self.frame_track_opacity = 0.2
        self.frame_colors = [self.frame0_color, self.frame1_color, self.frame2_color]
        self.frame_label_prefix = 'Frame '

        self.font_style = 'font-size:{font_size}px;font-weight:bold;text-anchor:{text_anchor};font-family:sans-serif'
        self.label_font_size = 11
        self.marker_font_size = 10
        self.end_label_font_size = 14

        self.noncoding_stroke_width = 2
        self.branch_stroke_width = 3
        self.translation_stroke_width = 12
        self.reinitiation_stroke_width = 2
        self.reinitiation_stroke_dasharray = [8, 4]
        self.reinitiation_opacity = 0.6
        self.readthrough_stroke_dasharray = [5, 5]
        self.frameshift_stroke_dasharray = [5, 3]
        self.start_stroke_width = 3
        self.near_cognate_stroke_width = 2
        self.stop_stroke_width = 2

        self.decision_radius = 5
        self.readthrough_radius = 8
        self.readthrough_decision_radius = 7
        self.readthrough_decision_fill = '#fef3c7'
        self.node_color = '#000000'

        self.abundance_gradient_steps = 10
        self.frame_fill_gradient = [
            [c.hex for c in Color('#ffffff').range_to(Color(color), self.abundance_gradient_steps + 1)][1:]
            for color in self.frame_colors
        ]

    @property
    def half_branch_spacing(self):
        return self.branch_spacing / 2
