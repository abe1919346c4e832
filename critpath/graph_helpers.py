# front matter
import logging

import networkx as nx

from critpath.exceptions import UnknownVertexError

logger = logging.getLogger(__name__)


def build_graph(duration_dict, edge_list):
    """
    inputs: duration_dict → {label: duration}, edge_list → list of (source, target) edges
    output: G → a networkx.DiGraph object; every node carries 'duration' and a dense 'index'
    cycles are left in place, the engine is responsible for detecting them
    """
    G = nx.DiGraph()
    for i, (label, dur) in enumerate(duration_dict.items()):
        G.add_node(label, duration=dur, index=i)
    for source, target in edge_list:
        # add_edge would silently create an unindexed node
        for end in (source, target):
            if end not in G:
                raise UnknownVertexError(f"Edge ({source}, {target}) refers to unknown task '{end}'")
        G.add_edge(source, target)
    logger.debug("Built task graph with %d tasks and %d edges", G.number_of_nodes(), G.number_of_edges())
    return G


class TaskGraph:
    """
    Read-only view of a directed task graph with dense vertex indexing.

    Vertices are the node labels of the wrapped networkx graph. Indices come
    from the node's 'index' attribute when every node has one (as set by
    build_graph), otherwise they follow node insertion order.
    """

    def __init__(self, G):
        self.nx_graph = G
        indexed = [(data.get("index"), node) for node, data in G.nodes(data=True)]
        if indexed and all(i is not None for i, _ in indexed):
            indexed.sort(key=lambda pair: pair[0])
            if [i for i, _ in indexed] != list(range(len(indexed))):
                raise ValueError("Vertex indices must be dense and zero-based")
            self._vertices = [node for _, node in indexed]
        else:
            self._vertices = list(G.nodes())
        self._index = {node: i for i, node in enumerate(self._vertices)}

    def __iter__(self):
        return iter(self._vertices)

    def __len__(self):
        return len(self._vertices)

    def __contains__(self, v):
        return v in self._index

    def size(self):
        return len(self._vertices)

    def index(self, v):
        try:
            return self._index[v]
        except KeyError:
            raise UnknownVertexError(f"Unknown vertex: {v!r}") from None

    def vertex(self, i):
        if not 0 <= i < len(self._vertices):
            raise UnknownVertexError(f"Vertex index {i} outside 0..{len(self._vertices) - 1}")
        return self._vertices[i]

    def incident(self, v):
        """outgoing edges of v as (tail, head) tuples"""
        self.index(v)
        return list(self.nx_graph.out_edges(v))

    def other_end(self, edge, v):
        tail, head = edge
        if v == tail:
            return head
        if v == head:
            return tail
        raise ValueError(f"Vertex {v!r} is not an endpoint of edge {edge!r}")

    def edges(self):
        return list(self.nx_graph.edges())

    def duration(self, v):
        """duration stored on the node by build_graph, 0 when absent"""
        return self.nx_graph.nodes[v].get("duration", 0)

    def __repr__(self):
        return f"TaskGraph({len(self)} vertices, {self.nx_graph.number_of_edges()} edges)"
