"""
converts a set of translons into a positioned graph of the decision paths of scanning ribosomes

The scanning rail runs 5' to 3'. At each translon start the rail branches: up into the translation row of
the translon and down into the continued scanning rail. Terminated ribosomes drop from the end of the
translation row back down to the rail (reinitiation). Each decision point lowers the rail so the depth of
the layout increases with every successive translon.

Node x coordinates are nucleotide positions and y coordinates are pixels.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

import networkx as nx

from ..constants import CODON_SIZE, EDGE_TYPE, NODE_TYPE
from ..engine.base import get_position
from ..engine.scan import find_next_stop_in_frame
from ..util import logger
from .constants import DiagramSettings


@dataclass
class TreeNode:
    id: str
    x: int
    y: float
    type: str
    translon: Optional[Any] = None


@dataclass
class TreeEdge:
    source: str
    target: str
    x1: int
    y1: float
    x2: int
    y2: float
    type: str
    translon: Optional[Any] = None
    readthrough_stop: Optional[int] = None
    readthrough_prob: Optional[float] = None


@dataclass
class TreeLayout:
    nodes: List[TreeNode] = field(default_factory=list)
    edges: List[TreeEdge] = field(default_factory=list)
    frameshift_sites: List[Any] = field(default_factory=list)

    def node(self, node_id: str) -> TreeNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError('no node with id', node_id)

    def edges_by_type(self, edge_type: str) -> List[TreeEdge]:
        return [e for e in self.edges if e.type == edge_type]

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        convert the layout to a directed multigraph. Nodes carry their position and type and edges their
        coordinates and type
        """
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(node.id, x=node.x, y=node.y, type=node.type)
        for edge in self.edges:
            graph.add_edge(
                edge.source, edge.target,
                type=edge.type, x1=edge.x1, y1=edge.y1, x2=edge.x2, y2=edge.y2)
        return graph


def _readthrough_frame(stop) -> int:
    try:
        return stop.frame
    except AttributeError:
        pass
    try:
        return stop['frame']
    except (KeyError, TypeError):
        return get_position(stop) % CODON_SIZE


def _readthrough_probability(stop) -> Optional[float]:
    try:
        return stop.probability
    except AttributeError:
        pass
    try:
        return stop.get('probability')
    except AttributeError:
        return None


def find_readthrough_in_translon(translon, readthrough_stops):
    """
    the first readthrough stop (by position) strictly inside the span of the translon and in its frame
    """
    candidates = []
    for stop in readthrough_stops or []:
        pos = get_position(stop)
        if pos is None:
            continue
        if translon.start_nt < pos < translon.end_nt and _readthrough_frame(stop) == translon.frame:
            candidates.append((pos, stop))
    if not candidates:
        return None
    return min(candidates, key=lambda c: c[0])[1]


def scanning_y_at_position(x_pos, sorted_translons, settings) -> float:
    """
    the y position of the scanning rail at a given nucleotide position. The rail is lowered by half the
    branch spacing for every translon starting before the position
    """
    y_pos = settings.rail_y
    for translon in sorted_translons:
        if translon.start_nt < x_pos:
            y_pos += settings.half_branch_spacing
        else:
            break
    return y_pos


def calculate_tree_layout(translons, sequence, readthrough_stops=None, frameshift_sites=None, settings=None) -> TreeLayout:
    """
    Args:
        translons (List[Translon]): the translons to lay out
        sequence (str): the sequence the translons were computed from
        readthrough_stops (List[ReadthroughStop]): stops which extend a translon in the same frame
        frameshift_sites (List[FrameshiftSite]): passed through to the layout for drawing
        settings (DiagramSettings): layout dimensions

    Returns:
        TreeLayout: the positioned nodes and edges
    """
    settings = DiagramSettings() if settings is None else settings
    readthrough_stops = list(readthrough_stops or [])
    layout = TreeLayout(frameshift_sites=list(frameshift_sites or []))
    seq_length = len(sequence)
    half_spacing = settings.half_branch_spacing

    current_y = settings.rail_y
    previous = TreeNode('root', 0, current_y, NODE_TYPE.ROOT)
    layout.nodes.append(previous)

    sorted_translons = sorted(translons, key=lambda t: t.start_nt)

    for index, translon in enumerate(sorted_translons):
        branch_x = translon.start_nt
        branch_y = current_y
        translation_y = branch_y - half_spacing
        scanning_y = branch_y + half_spacing

        decision = TreeNode(f'decision_{index}', branch_x, branch_y, NODE_TYPE.DECISION)
        layout.nodes.append(decision)
        layout.edges.append(TreeEdge(
            previous.id, decision.id, previous.x, previous.y, branch_x, branch_y, EDGE_TYPE.NONCODING))

        name = translon.name or f'translon_{index}'
        readthrough = find_readthrough_in_translon(translon, readthrough_stops)
        end_x = translon.end_nt
        if readthrough is not None:
            first_stop = get_position(readthrough)
            end_x = find_next_stop_in_frame(sequence, first_stop, translon.frame, readthrough_stops)
            logger.debug(f'translon {name} reads through the stop at {first_stop} and is extended to {end_x}')

        endpoint = TreeNode(f'{name}_end', end_x, translation_y, NODE_TYPE.ENDPOINT, translon)
        scanning = TreeNode(f'scanning_{index}', branch_x, scanning_y, NODE_TYPE.SCANNING)
        layout.nodes.append(endpoint)

        layout.edges.append(TreeEdge(
            decision.id, endpoint.id, branch_x, branch_y, branch_x, translation_y, EDGE_TYPE.VERTICAL_BRANCH))
        translation = TreeEdge(
            decision.id, endpoint.id, branch_x, translation_y, end_x, translation_y, EDGE_TYPE.TRANSLATION,
            translon=translon)
        layout.edges.append(translation)

        if readthrough is not None:
            translation.readthrough_stop = first_stop
            translation.readthrough_prob = _readthrough_probability(readthrough)
            first_stop_end = first_stop + CODON_SIZE
            stop_node = TreeNode(
                f'{name}_first_stop', first_stop_end, translation_y, NODE_TYPE.READTHROUGH_DECISION, translon)
            layout.nodes.append(stop_node)

        layout.nodes.append(scanning)
        layout.edges.append(TreeEdge(
            decision.id, scanning.id, branch_x, branch_y, branch_x, scanning_y, EDGE_TYPE.VERTICAL_BRANCH))

        if readthrough is not None:
            layout.edges.append(TreeEdge(
                stop_node.id, scanning.id,
                first_stop_end, translation_y,
                first_stop_end, scanning_y_at_position(first_stop_end, sorted_translons, settings),
                EDGE_TYPE.REINITIATION, translon=translon))
        layout.edges.append(TreeEdge(
            endpoint.id, scanning.id,
            end_x, translation_y,
            end_x, scanning_y_at_position(end_x, sorted_translons, settings),
            EDGE_TYPE.REINITIATION, translon=translon))

        previous = scanning
        current_y = scanning_y

    end = TreeNode('end', seq_length, current_y, NODE_TYPE.END)
    layout.nodes.append(end)
    layout.edges.append(TreeEdge(
        previous.id, end.id, previous.x, previous.y, seq_length, current_y, EDGE_TYPE.NONCODING))
    logger.debug(f'laid out {len(layout.nodes)} nodes and {len(layout.edges)} edges')
    return layout
