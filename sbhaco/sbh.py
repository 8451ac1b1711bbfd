"""Overlap graph of a k-mer spectrum and path searches over it."""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    """A directed overlap from one k-mer to another."""

    target: int
    weight: int
    overlap: int


class InvalidKmerError(ValueError):
    """Raised when a k-mer in the spectrum does not have length k."""


Adjacency = list[list[Edge]]


def build_adjacency(kmers: Sequence[str], k: int) -> Adjacency:
    """Build the overlap graph; each node's edges go from largest overlap down."""
    for kmer in kmers:
        if len(kmer) != k:
            raise InvalidKmerError(f"Invalid k-mer length: {kmer}")

    prefix_map: dict[int, dict[str, list[int]]] = {o: {} for o in range(1, k)}
    for j, seq in enumerate(kmers):
        for o in range(1, k):
            prefix_map[o].setdefault(seq[:o], []).append(j)

    adjacency: Adjacency = [[] for _ in kmers]
    for i, kmer in enumerate(kmers):
        for o in range(k - 1, 0, -1):
            for j in prefix_map[o].get(kmer[-o:], ()):
                if j != i:
                    adjacency[i].append(Edge(j, k - o, o))
    return adjacency


def _check_index(index: int, kmers: Sequence[str]) -> None:
    if not 0 <= index < len(kmers):
        raise IndexError(f"Invalid index in trail: {index}")


def reconstruct_sequence(
    kmers: Sequence[str],
    k: int,
    trail: Sequence[int],
    n: int,
    adjacency: Adjacency,
) -> str:
    """Join the k-mers along ``trail`` by their overlaps, up to ``n`` letters."""
    if not trail or not kmers:
        return ""

    _check_index(trail[0], kmers)
    parts = [kmers[trail[0]]]
    seq_len = k

    for u, v in zip(trail, trail[1:]):
        _check_index(u, kmers)
        _check_index(v, kmers)

        overlap = next((e.overlap for e in adjacency[u] if e.target == v), 0)
        add_len = k - overlap
        if seq_len + add_len > n:
            to_add = max(n - seq_len, 0)
            parts.append(kmers[v][overlap:overlap + to_add])
            break

        parts.append(kmers[v][overlap:])
        seq_len += add_len
        if seq_len >= n:
            break

    return "".join(parts)[:n]


def edge_weight(adjacency: Adjacency, u: int, v: int) -> int | None:
    """Return the weight of the first edge from ``u`` to ``v``, or None."""
    return next((e.weight for e in adjacency[u] if e.target == v), None)


def find_eulerian_path(adjacency: Adjacency) -> list[int]:
    """Return an Eulerian path over the graph's edges, or an empty list."""
    n = len(adjacency)
    if n == 0:
        return []

    out_degree = [len(edges) for edges in adjacency]
    in_degree = [0] * n
    for edges in adjacency:
        for edge in edges:
            in_degree[edge.target] += 1

    start = 0
    start_nodes = end_nodes = 0
    for i, (out_d, in_d) in enumerate(zip(out_degree, in_degree)):
        if out_d == in_d + 1:
            start = i
            start_nodes += 1
        elif in_d == out_d + 1:
            end_nodes += 1
        elif out_d != in_d:
            return []

    if start_nodes == 0 and end_nodes == 0:
        start = next((i for i, d in enumerate(out_degree) if d > 0), 0)
    elif start_nodes != 1 or end_nodes != 1:
        return []

    remaining = [list(edges) for edges in adjacency]
    path: list[int] = []
    circuit = [start]
    current = start
    while circuit:
        if remaining[current]:
            circuit.append(current)
            current = remaining[current].pop().target
        else:
            path.append(current)
            current = circuit.pop()
    path.reverse()
    return path


def _search_path(
    adjacency: Adjacency,
    start: int,
    total_nodes: int,
    accept_partial: bool,
) -> list[int]:
    """Depth-first search for a path visiting ``total_nodes`` distinct nodes.

    With ``accept_partial`` a dead end reached once the path covers 80% of the
    nodes is accepted as well.
    """
    visited = [False] * total_nodes
    visited[start] = True
    path = [start]
    if len(path) == total_nodes:
        return path

    stack = [iter(adjacency[start])]
    while stack:
        for edge in stack[-1]:
            nxt = edge.target
            if visited[nxt]:
                continue
            visited[nxt] = True
            path.append(nxt)
            if len(path) == total_nodes:
                return path
            stack.append(iter(adjacency[nxt]))
            break
        else:
            if accept_partial and len(path) * 10 >= total_nodes * 8:
                return path
            stack.pop()
            visited[path.pop()] = False
    return []


def find_hamiltonian_path(adjacency: Adjacency) -> list[int]:
    """Return a path visiting every node once, or an empty list."""
    n = len(adjacency)
    for start in range(n):
        path = _search_path(adjacency, start, n, accept_partial=False)
        if path:
            return path
    return []


def is_connected(adjacency: Adjacency) -> bool:
    """Tell whether every node taking part in an edge is reachable from the first."""
    n = len(adjacency)
    if n <= 1:
        return True

    start = next((i for i, edges in enumerate(adjacency) if edges), 0)
    visited = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for edge in adjacency[current]:
            if edge.target not in visited:
                visited.add(edge.target)
                stack.append(edge.target)

    all_nodes: set[int] = set()
    for i, edges in enumerate(adjacency):
        if edges:
            all_nodes.add(i)
            all_nodes.update(edge.target for edge in edges)
    return len(visited) >= len(all_nodes)


def sequencing_by_hybridization(
    kmers: Sequence[str], k: int, target_length: int
) -> str:
    """Rebuild a sequence from its spectrum via an Eulerian or Hamiltonian path."""
    if not kmers:
        return ""

    adjacency = build_adjacency(kmers, k)
    if not is_connected(adjacency):
        logger.info("Graph is not connected.")

    path = find_eulerian_path(adjacency)
    if not path:
        logger.info("No Eulerian path found; trying a Hamiltonian path.")
        path = find_hamiltonian_path(adjacency)
    if not path:
        logger.info("No valid path found in the graph.")
        return ""

    logger.info("Found path of length %d.", len(path))
    return reconstruct_sequence(kmers, k, path, target_length, adjacency)


def sequencing_by_hybridization_with_start(
    kmers: Sequence[str], k: int, target_length: int, start_oligo: str
) -> str:
    """Rebuild a sequence starting from ``start_oligo`` where possible."""
    if not kmers:
        return ""

    adjacency = build_adjacency(kmers, k)
    try:
        start_idx = list(kmers).index(start_oligo)
    except ValueError:
        logger.warning("Start oligo not found in spectrum; using general approach.")
        return sequencing_by_hybridization(kmers, k, target_length)

    path = find_path_from_start(adjacency, start_idx, len(kmers))
    if not path:
        logger.warning("No path found from starting oligo; using general approach.")
        return sequencing_by_hybridization(kmers, k, target_length)

    logger.info("Found path of length %d.", len(path))
    return reconstruct_sequence(kmers, k, path, target_length, adjacency)


def find_path_from_start(
    adjacency: Adjacency, start: int, total_nodes: int
) -> list[int]:
    """Find a path from ``start`` covering all nodes, or at least 80% of them."""
    return _search_path(adjacency, start, total_nodes, accept_partial=True)


def generate_kmers(sequence: str, k: int) -> list[str]:
    """Return every substring of length ``k`` in order."""
    return [sequence[i:i + k] for i in range(len(sequence) - k + 1)]


def dijkstra_shortest_path(
    adjacency: Adjacency,
    used_count: Sequence[int],
    repeat_limits: Sequence[int],
    start: int,
    targets: Iterable[int],
) -> tuple[int | None, list[int]]:
    """Find the nearest target from ``start`` through nodes not used up.

    Returns the target and the path to it, or ``(None, [])``.
    """
    inf = float("inf")
    dist = [inf] * len(adjacency)
    prev = [-1] * len(adjacency)
    dist[start] = 0

    target_set = set(targets)
    best_target: int | None = None
    best_dist = inf
    heap = [(0, start)]

    while heap:
        d_u, u = heapq.heappop(heap)
        if d_u > dist[u]:
            continue
        if u in target_set and d_u < best_dist:
            best_dist = d_u
            best_target = u
        for edge in adjacency[u]:
            v = edge.target
            if used_count[v] >= repeat_limits[v]:
                continue
            new_dist = d_u + edge.weight
            if new_dist < dist[v]:
                dist[v] = new_dist
                prev[v] = u
                heapq.heappush(heap, (new_dist, v))

    if best_target is None:
        return None, []

    path = []
    node = best_target
    while node != -1:
        path.append(node)
        node = prev[node]
    path.reverse()
    return best_target, path