"""
hit-testing of pointer positions against a drawn decision graph. All functions take the layout and the
pixel mapping used to draw it as explicit inputs
"""
from ..constants import EDGE_TYPE
from ..engine.scan import find_stop_codons

TRANSLON_TOLERANCE = 40
FRAME_TOLERANCE = 15
STOP_TOLERANCE = 12
START_X_TOLERANCE = 10
START_Y_TOLERANCE = 12
DEFAULT_FRAME_TRACK_Y = [80, 110, 140]


def hit_test_translon_at(layout, x, y, mapping, y_offset=0):
    """
    Returns:
        Translon: the translon of the first translation edge under the point or None
    """
    for edge in layout.edges_by_type(EDGE_TYPE.TRANSLATION):
        x1 = mapping.convert_pos(edge.x1)
        x2 = mapping.convert_pos(edge.x2)
        if x1 <= x <= x2 and abs(y - (edge.y1 + y_offset)) <= TRANSLON_TOLERANCE:
            return edge.translon
    return None


def _nearest_frame(y, frame_track_y):
    frame = None
    min_dy = FRAME_TOLERANCE
    for i, track_y in enumerate(frame_track_y):
        dy = abs(y - track_y)
        if dy < min_dy:
            min_dy = dy
            frame = i
    return frame


def hit_test_stop_at(sequence, x, y, mapping, frame_track_y=None):
    """
    Returns:
        StopCodon: the stop codon closest to the point on the frame track under the point or None
    """
    if not sequence:
        return None
    frame = _nearest_frame(y, frame_track_y or DEFAULT_FRAME_TRACK_Y)
    if frame is None:
        return None
    best = None
    best_dx = STOP_TOLERANCE
    for stop in find_stop_codons(sequence, frame):
        dx = abs(mapping.convert_pos(stop.pos) - x)
        if dx < best_dx:
            best_dx = dx
            best = stop
    return best


def hit_test_start_at(start_codons, x, y, mapping, frame_track_y=None):
    """
    Returns:
        StartCodon: the start codon whose tick is closest (horizontally) to the point or None
    """
    frame_track_y = frame_track_y or DEFAULT_FRAME_TRACK_Y
    best = None
    best_dx = None
    for start in start_codons or []:
        dx = abs(x - mapping.convert_pos(start.pos))
        dy = abs(y - frame_track_y[start.frame])
        if dx <= START_X_TOLERANCE and dy <= START_Y_TOLERANCE and (best_dx is None or dx < best_dx):
            best_dx = dx
            best = start
    return best
