from colour import Color

from ..error import DrawingFitError

HEX_WHITE = '#FFFFFF'
HEX_BLACK = '#000000'


def dynamic_label_color(color):
    """
    calculates the luminance of a color and determines if a black or white label will be more contrasting
    """
    color = Color(color)
    if color.get_luminance() < 0.5:
        return HEX_WHITE
    return HEX_BLACK


def nt_to_pixel(pos, seq_length, width, margin):
    """
    convert a nucleotide position to a horizontal pixel position using a linear scale

    Example:
        >>> nt_to_pixel(50, 100, 1000, 50)
        500.0
    """
    if seq_length <= 0:
        return float(margin)
    return margin + (pos / seq_length) * (width - 2 * margin)


class PixelMapping:
    """
    maps nucleotide positions of a sequence onto the horizontal pixel positions of a drawing

    Attributes:
        seq_length (int): the length of the sequence being drawn
        width (int): the width of the drawing in pixels
        margin (int): the margin on either side of the sequence in pixels
    """

    def __init__(self, seq_length, width, margin):
        self.seq_length = seq_length
        self.width = width
        self.margin = margin

    @classmethod
    def from_settings(cls, settings, seq_length):
        """
        Raises:
            DrawingFitError: if the drawable width is less than the minimum width
        """
        if settings.width - 2 * settings.margin < settings.min_width:
            raise DrawingFitError(
                'drawing width is insufficient to fit the sequence', settings.width, settings.margin, settings.min_width)
        return cls(seq_length, settings.width, settings.margin)

    @property
    def drawable_width(self):
        return self.width - 2 * self.margin

    def convert_pos(self, pos):
        return nt_to_pixel(pos, self.seq_length, self.width, self.margin)

    def convert_pixel(self, x):
        """
        the nucleotide position (rounded down) at a horizontal pixel position
        """
        if self.drawable_width <= 0:
            return 0
        return int((x - self.margin) / self.drawable_width * self.seq_length)

    def nt_width(self):
        """
        the width in pixels of a single nucleotide
        """
        if self.seq_length <= 0:
            return 0
        return self.drawable_width / self.seq_length


def abundance_fill(settings, frame, abundance):
    """
    the translation bar color of a translon in a given frame. Higher abundance gives a more saturated color
    """
    gradient = settings.frame_fill_gradient[frame % len(settings.frame_fill_gradient)]
    abundance = max(0, min(1, abundance))
    return gradient[min(len(gradient) - 1, int(abundance * len(gradient)))]
