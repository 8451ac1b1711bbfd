"""The ant colony search that rebuilds a sequence from its k-mer spectrum."""

from __future__ import annotations

import logging
import random
import time
from typing import Sequence

from .ants import Ant, BestSolution, Settings, choose_random, two_opt_on_trail, update_pheromones
from .levenshtein import levenshtein_score
from .sbh import Adjacency, build_adjacency, dijkstra_shortest_path, edge_weight, reconstruct_sequence

logger = logging.getLogger(__name__)

_DEFAULTS = Settings()
_TWO_OPT_SWAPS = 20
_MIN_PHEROMONE = 1e-12


def _append(ant: Ant, node: int, weight: float) -> None:
    ant.trail.append(node)
    ant.used_count[node] += 1
    ant.cost += weight
    ant.seq_len += weight


def _step_by_overlap(
    ant: Ant,
    adjacency: Adjacency,
    u: int,
    k: int,
    repeat_limits: Sequence[int],
    rng: random.Random,
) -> bool:
    """Move along the largest overlap available, preferring unused k-mers."""
    for overlap in range(k - 1, 0, -1):
        fresh: list[tuple[int, int]] = []
        reuse: list[tuple[int, int]] = []
        for edge in adjacency[u]:
            if edge.overlap != overlap:
                continue
            used = ant.used_count[edge.target]
            if used == 0:
                fresh.append((edge.target, edge.weight))
            elif used < repeat_limits[edge.target]:
                reuse.append((edge.target, edge.weight))
        pool = fresh or reuse
        if pool:
            node, weight = choose_random(pool, rng)
            _append(ant, node, weight)
            return True
    return False


def _pheromone_step(
    ant: Ant,
    adjacency: Adjacency,
    pheromone: Sequence[Sequence[float]],
    u: int,
    alpha: float,
    beta: float,
    repeat_limits: Sequence[int],
    rng: random.Random,
) -> None:
    """Pick an edge with probability weighted by pheromone and overlap."""
    candidates = []
    for edge in adjacency[u]:
        v = edge.target
        if ant.used_count[v] < repeat_limits[v]:
            pher = pheromone[u][v] if pheromone[u][v] > 0.0 else _MIN_PHEROMONE
            candidates.append((edge, pher ** alpha * float(edge.overlap) ** beta))
    if not candidates:
        return

    total = sum(prob for _, prob in candidates)
    pick = rng.uniform(0.0, total)
    cumulative = 0.0
    for edge, prob in candidates:
        cumulative += prob
        if pick <= cumulative:
            _append(ant, edge.target, edge.weight)
            return


def _shortest_path_step(
    ant: Ant,
    adjacency: Adjacency,
    u: int,
    k: int,
    n: int,
    repeat_limits: Sequence[int],
) -> bool:
    """Walk the cheapest path to the nearest k-mer that can still be used."""
    targets = [
        j for j, (used, limit) in enumerate(zip(ant.used_count, repeat_limits)) if used < limit
    ]
    if not targets:
        return False
    _, path = dijkstra_shortest_path(adjacency, ant.used_count, repeat_limits, u, targets)
    if len(path) < 2:
        return False
    for prev, v in zip(path, path[1:]):
        weight = edge_weight(adjacency, prev, v)
        _append(ant, v, k if weight is None else weight)
        if ant.seq_len >= n or ant.trail_len >= ant.max_steps:
            break
    return True


def _jump(ant: Ant, k: int, repeat_limits: Sequence[int]) -> bool:
    """Append the first k-mer still available without any overlap."""
    for j, (used, limit) in enumerate(zip(ant.used_count, repeat_limits)):
        if used < limit:
            _append(ant, j, k)
            return True
    return False


def _reset(ant: Ant, k: int, num_kmers: int) -> None:
    start = ant.trail[0]
    ant.trail = [start]
    ant.seq_len = k
    ant.cost = 0.0
    ant.used_count = [0] * num_kmers
    ant.used_count[start] = 1


def update_ants(
    ants: Sequence[Ant],
    kmers: Sequence[str],
    k: int,
    adjacency: Adjacency,
    pheromone: Sequence[Sequence[float]],
    alpha: float,
    beta: float,
    num_neg_errors: int,
    num_pos_errors: int,
    repeat_limits: Sequence[int],
    n: int,
    rng: random.Random,
) -> None:
    """Let every ant build a new trail from its starting k-mer."""
    ideal = num_neg_errors == 0 and num_pos_errors == 0

    for ant in ants:
        _reset(ant, k, len(kmers))

        while ant.seq_len < n and ant.trail_len < ant.max_steps:
            u = ant.trail[-1]
            if not ideal:
                _pheromone_step(ant, adjacency, pheromone, u, alpha, beta, repeat_limits, rng)
                if ant.trail_len >= ant.max_steps:
                    break
            if (
                _step_by_overlap(ant, adjacency, u, k, repeat_limits, rng)
                or _shortest_path_step(ant, adjacency, u, k, n, repeat_limits)
                or _jump(ant, k, repeat_limits)
            ):
                continue
            break

        if ant.seq_len >= n:
            two_opt_on_trail(ant, kmers, k, n, adjacency, _TWO_OPT_SWAPS, rng)


def run_aco(
    kmers: Sequence[str],
    k: int,
    n: int,
    start_oligo: str,
    num_neg_errors: int,
    has_repeats: bool,
    num_pos_errors: int,
    num_ants: int = _DEFAULTS.num_ants,
    alpha: float = _DEFAULTS.alpha,
    beta: float = _DEFAULTS.beta,
    rho: float = _DEFAULTS.rho,
    q: float = _DEFAULTS.q,
    tau0: float = _DEFAULTS.tau0,
    max_time: int = _DEFAULTS.max_time,
    max_iter: int = _DEFAULTS.max_iter,
    seed: int | None = None,
) -> str:
    """Search for the shortest trail spelling a sequence of length ``n``.

    The search stops after ``max_time`` seconds or ``max_iter`` iterations,
    whichever limit is positive and reached first.
    """
    if not kmers:
        raise ValueError("The spectrum is empty")

    rng = random.Random(seed)
    num_kmers = len(kmers)

    try:
        start_idx: int | None = list(kmers).index(start_oligo)
    except ValueError:
        start_idx = None
        logger.warning("Start oligo not found in spectrum; starting from random k-mers.")

    adjacency = build_adjacency(kmers, k)
    pheromone = [[0.0] * num_kmers for _ in range(num_kmers)]
    for u, edges in enumerate(adjacency):
        for edge in edges:
            pheromone[u][edge.target] = tau0

    limit = num_neg_errors + 1 if has_repeats else 1
    repeat_limits = [limit] * num_kmers

    ants = []
    for _ in range(num_ants):
        start = start_idx if start_idx is not None else rng.randrange(num_kmers)
        ant = Ant(max_steps=num_kmers, num_kmers=num_kmers, trail=[start])
        ant.used_count[start] += 1
        ant.cost += 1
        ants.append(ant)

    best = BestSolution()
    started = time.monotonic()
    iteration = 0
    while True:
        iteration += 1
        update_ants(
            ants, kmers, k, adjacency, pheromone, alpha, beta,
            num_neg_errors, num_pos_errors, repeat_limits, n, rng,
        )

        for ant in ants:
            if ant.seq_len < n:
                continue
            sequence = reconstruct_sequence(kmers, k, ant.trail, n, adjacency)
            dist = levenshtein_score(sequence, "")
            if ant.cost < best.length or (ant.cost == best.length and dist < best.dist):
                best.length = ant.cost
                best.trail = list(ant.trail)
                best.sequence = sequence
                best.dist = dist

        update_pheromones(pheromone, ants, n, q, rho, best)

        elapsed = int(time.monotonic() - started)
        if (max_time > 0 and elapsed >= max_time) or (max_iter > 0 and iteration >= max_iter):
            break

    return best.sequence