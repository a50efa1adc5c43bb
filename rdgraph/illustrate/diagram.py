"""
This is the primary module responsible for generating svg visualizations of the decision graph

"""
from svgwrite import Drawing

from ..constants import EDGE_TYPE, NODE_TYPE
from ..construct.constants import RLUC_FAMILY, REGION_TYPE
from ..engine.base import get_position
from ..engine.scan import find_stop_codons
from .util import abundance_fill, dynamic_label_color, PixelMapping

BOTTOM_PADDING = 40


def _region_frame(region):
    start = region.start if region.assembled else region.start - 1
    return start % 3


def draw_regions(settings, canvas, regions, mapping):
    """
    draw the construct regions along the top of the diagram. Reporter ORFs are also drawn on the track of
    their reading frame
    """
    main_group = canvas.g(class_='construct_regions')
    style = settings.font_style
    for region in regions:
        start = region.start if region.assembled else region.start - 1
        x1 = mapping.convert_pos(start)
        x2 = mapping.convert_pos(region.end)
        group = canvas.g(class_='region')
        group.add(canvas.rect(
            (x1, settings.region_track_y), (max(0, x2 - x1), settings.region_track_height),
            fill=region.color, fill_opacity=settings.region_opacity, stroke=region.color, stroke_width=2
        ))
        group.add(canvas.text(
            region.type,
            insert=((x1 + x2) / 2, settings.region_track_y + settings.region_track_height * 3 / 4),
            fill=region.color,
            style=style.format(font_size=settings.marker_font_size, text_anchor='middle'),
            class_='label'
        ))
        if region.type in RLUC_FAMILY or region.type == REGION_TYPE.FLUC:
            frame = _region_frame(region)
            y = settings.frame_track_y[frame]
            group.add(canvas.rect(
                (x1, y - settings.frame_track_height / 2), (max(0, x2 - x1), settings.frame_track_height),
                fill=region.color, fill_opacity=settings.reporter_opacity, stroke=region.color, stroke_width=3
            ))
            group.add(canvas.text(
                f'{region.type} (Frame {frame})',
                insert=((x1 + x2) / 2, y - settings.frame_track_height / 2 - 5),
                fill=region.color,
                style=style.format(font_size=settings.label_font_size, text_anchor='middle'),
                class_='label'
            ))
        main_group.add(group)
    return main_group


def draw_frame_tracks(settings, canvas, sequence, mapping, start_codons, readthrough_stops, frameshift_sites):
    """
    draw the three reading frames with ticks for the start and stop codons and markers for the readthrough
    stops and frameshift sites
    """
    main_group = canvas.g(class_='frames')
    style = settings.font_style
    half_height = settings.frame_track_height / 2
    x_start = mapping.convert_pos(0)
    x_end = mapping.convert_pos(len(sequence))

    for frame, y in enumerate(settings.frame_track_y):
        color = settings.frame_colors[frame]
        main_group.add(canvas.text(
            f'{settings.frame_label_prefix}{frame}',
            insert=(x_start - 10, y + 4),
            fill=color,
            style=style.format(font_size=settings.label_font_size, text_anchor='end'),
            class_='label'
        ))
        main_group.add(canvas.rect(
            (x_start, y - half_height), (x_end - x_start, settings.frame_track_height),
            fill=color, fill_opacity=settings.frame_track_opacity, stroke=color, stroke_width=1
        ))

    for start in start_codons:
        x = mapping.convert_pos(start.pos)
        y = settings.frame_track_y[start.frame]
        main_group.add(canvas.line(
            (x, y - half_height), (x, y + half_height),
            stroke=settings.start_color if start.is_aug else settings.near_cognate_color,
            stroke_width=settings.start_stroke_width if start.is_aug else settings.near_cognate_stroke_width,
            class_='start_codon'
        ))

    for stop in find_stop_codons(sequence):
        x = mapping.convert_pos(stop.pos)
        y = settings.frame_track_y[stop.frame]
        main_group.add(canvas.line(
            (x, y - half_height), (x, y + half_height),
            stroke=settings.stop_color, stroke_width=settings.stop_stroke_width, class_='stop_codon'
        ))

    for stop in readthrough_stops:
        pos = get_position(stop)
        x = mapping.convert_pos(pos)
        y = settings.frame_track_y[pos % 3]
        group = canvas.g(class_='readthrough_stop')
        group.add(canvas.circle(
            (x, y), settings.readthrough_radius, fill='none', stroke=settings.readthrough_color, stroke_width=3))
        group.add(canvas.text(
            'RT', insert=(x, y - 15), fill=settings.readthrough_color,
            style=style.format(font_size=settings.marker_font_size, text_anchor='middle'),
        ))
        main_group.add(group)

    for site in frameshift_sites:
        x = mapping.convert_pos(site.pos)
        from_y = settings.frame_track_y[site.from_frame]
        to_y = settings.frame_track_y[site.to_frame]
        group = canvas.g(class_='frameshift')
        line = canvas.line((x, from_y), (x, to_y), stroke=settings.frameshift_color, stroke_width=3)
        line.dasharray(settings.frameshift_stroke_dasharray)
        group.add(line)
        group.add(canvas.text(
            f'FS{site.shift:+d}', insert=(x, min(from_y, to_y) - 15), fill=settings.frameshift_color,
            style=style.format(font_size=settings.marker_font_size, text_anchor='middle'),
        ))
        main_group.add(group)

    middle_y = settings.frame_track_y[1] + 4
    for label, x in [("5'", x_start - 30), ("3'", x_end + 20)]:
        main_group.add(canvas.text(
            label, insert=(x, middle_y), fill=settings.label_color,
            style=style.format(font_size=settings.end_label_font_size, text_anchor='middle'),
        ))
    return main_group


def draw_edge(settings, canvas, edge, mapping):
    """
    generates the svg element(s) representing a single edge of the layout
    """
    x1 = mapping.convert_pos(edge.x1)
    x2 = mapping.convert_pos(edge.x2)
    style = settings.font_style

    if edge.type == EDGE_TYPE.NONCODING:
        return canvas.line(
            (x1, edge.y1), (x2, edge.y2), stroke=settings.noncoding_color,
            stroke_width=settings.noncoding_stroke_width, class_=edge.type)
    elif edge.type == EDGE_TYPE.VERTICAL_BRANCH:
        return canvas.line(
            (x1, edge.y1), (x2, edge.y2), stroke=settings.node_color,
            stroke_width=settings.branch_stroke_width, class_=edge.type)
    elif edge.type == EDGE_TYPE.REINITIATION:
        line = canvas.line(
            (x1, edge.y1), (x2, edge.y2), stroke=settings.reinitiation_color,
            stroke_width=settings.reinitiation_stroke_width, stroke_opacity=settings.reinitiation_opacity,
            class_=edge.type)
        line.dasharray(settings.reinitiation_stroke_dasharray)
        return line

    group = canvas.g(class_=edge.type)
    translon = edge.translon
    fill = abundance_fill(settings, translon.frame, translon.predicted_abundance)
    # the segment past a readthrough stop is conditional and drawn dashed
    solid_x2 = x2 if edge.readthrough_stop is None else mapping.convert_pos(edge.readthrough_stop)
    group.add(canvas.line(
        (x1, edge.y1), (solid_x2, edge.y2), stroke=fill, stroke_width=settings.translation_stroke_width))
    if solid_x2 < x2:
        line = canvas.line(
            (solid_x2, edge.y1), (x2, edge.y2), stroke=fill, stroke_width=settings.translation_stroke_width,
            class_=EDGE_TYPE.READTHROUGH)
        line.dasharray(settings.readthrough_stroke_dasharray)
        group.add(line)
    group.add(canvas.text(
        translon.name,
        insert=(x1 + 5, edge.y1 - 8),
        fill=settings.frame_colors[translon.frame],
        style=style.format(font_size=settings.label_font_size, text_anchor='start'),
        class_='label'
    ))
    if translon.predicted_abundance is not None and x2 - x1 > settings.label_font_size * 3:
        group.add(canvas.text(
            f'{translon.predicted_abundance:.0%}',
            insert=((x1 + x2) / 2, edge.y1 + 4),
            fill=dynamic_label_color(fill),
            style=style.format(font_size=settings.marker_font_size, text_anchor='middle'),
        ))
    if edge.readthrough_stop is not None:
        stop_x = mapping.convert_pos(edge.readthrough_stop)
        group.add(canvas.line(
            (stop_x, edge.y1 - 6), (stop_x, edge.y1 + 6), stroke=settings.readthrough_color, stroke_width=3))
        label = 'RT' if edge.readthrough_prob is None else f'RT {edge.readthrough_prob:.0%}'
        group.add(canvas.text(
            label, insert=(stop_x, edge.y1 - 12), fill=settings.readthrough_color,
            style=style.format(font_size=settings.marker_font_size, text_anchor='middle'),
        ))
    return group


def draw_node(settings, canvas, node, mapping):
    x = mapping.convert_pos(node.x)
    if node.type == NODE_TYPE.DECISION:
        return canvas.circle((x, node.y), settings.decision_radius, fill=settings.node_color, class_=node.type)
    elif node.type == NODE_TYPE.READTHROUGH_DECISION:
        return canvas.circle(
            (x, node.y), settings.readthrough_decision_radius, fill=settings.readthrough_decision_fill,
            stroke=settings.readthrough_color, stroke_width=3, class_=node.type)
    return None


def draw_tree_layout(settings, layout, sequence, start_codons=None, regions=None, readthrough_stops=None):
    """
    draw the decision graph of a sequence

    Args:
        settings (DiagramSettings): the settings/constants to use for building the svg
        layout (TreeLayout): the layout to draw
        sequence (str): the sequence the layout was computed from
        start_codons (List[StartCodon]): start codons to mark on the frame tracks
        regions (List[ConstructRegion]): construct regions to draw above the frame tracks
        readthrough_stops (List[ReadthroughStop]): readthrough stops to mark on the frame tracks

    Returns:
        svgwrite.Drawing: the drawing

    Raises:
        DrawingFitError: if the width of the drawing is insufficient to draw the sequence
    """
    mapping = PixelMapping.from_settings(settings, len(sequence))
    canvas = Drawing(size=(settings.width, 1000))  # just set the height for now and change later

    if regions:
        canvas.add(draw_regions(settings, canvas, regions, mapping))
    canvas.add(draw_frame_tracks(
        settings, canvas, sequence, mapping, start_codons or [], readthrough_stops or [], layout.frameshift_sites))

    edge_group = canvas.g(class_='edges')
    for edge in layout.edges:
        edge_group.add(draw_edge(settings, canvas, edge, mapping))
    canvas.add(edge_group)

    node_group = canvas.g(class_='nodes')
    for node in layout.nodes:
        element = draw_node(settings, canvas, node, mapping)
        if element is not None:
            node_group.add(element)
    canvas.add(node_group)

    y_values = [settings.frame_track_y[-1] + settings.frame_track_height]
    y_values.extend([n.y for n in layout.nodes])
    canvas.attribs['height'] = max(y_values) + BOTTOM_PADDING
    return canvas
