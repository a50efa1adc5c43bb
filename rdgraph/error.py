class InputFormatError(Exception):
    """
    raised when an input file (sequence, regions or config) cannot be parsed
    """
    pass


class DrawingFitError(Exception):
    pass
