"""Ants, their shared settings, and pheromone bookkeeping for the colony search."""

from __future__ import annotations

import math
import random
from dataclasses import InitVar, dataclass, field
from typing import Iterable, Sequence, TypeVar

from .sbh import Adjacency, edge_weight

T = TypeVar("T")


@dataclass(frozen=True)
class Settings:
    """Default parameters of the ant colony search."""

    num_ants: int = 30
    alpha: float = 1.0
    beta: float = 2.0
    rho: float = 0.5
    q: float = 1.0
    tau0: float = 1.0
    max_time: int = 120
    max_iter: int = 1000


@dataclass
class Ant:
    """One ant: the k-mers it has visited, their use counts, and its cost."""

    max_steps: int
    num_kmers: InitVar[int]
    trail: list[int] = field(default_factory=list)
    used_count: list[int] = field(init=False)
    cost: float = 0.0
    seq_len: int = 0

    def __post_init__(self, num_kmers: int) -> None:
        self.used_count = [0] * num_kmers

    @property
    def trail_len(self) -> int:
        """Number of k-mers on the trail."""
        return len(self.trail)


@dataclass
class BestSolution:
    """The best trail seen so far and the sequence it spells."""

    length: float = math.inf
    trail: list[int] = field(default_factory=list)
    sequence: str = ""
    dist: float = math.inf


def choose_random(candidates: Sequence[T], rng: random.Random) -> T:
    """Pick one candidate uniformly at random; raises IndexError when empty."""
    return rng.choice(candidates)


def two_opt_on_trail(
    ant: Ant,
    kmers: Sequence[str],
    k: int,
    n: int,
    adjacency: Adjacency,
    max_swaps: int,
    rng: random.Random,
) -> None:
    """Try random segment reversals and keep the cheapest valid trail found."""
    trail_len = ant.trail_len
    if trail_len < 4:
        return

    best_len = ant.cost
    best_trail = list(ant.trail)

    for _ in range(max_swaps):
        i = rng.randint(1, trail_len - 3)
        j = rng.randint(i + 1, trail_len - 2)
        new_trail = ant.trail[:i] + ant.trail[i:j + 1][::-1] + ant.trail[j + 1:]

        new_length = _trail_length(new_trail, adjacency, k, n)
        if new_length is not None and new_length < best_len:
            best_len = new_length
            best_trail = new_trail

    if best_len < ant.cost:
        ant.trail = best_trail
        ant.cost = best_len
        if n >= 0:
            ant.seq_len = max(ant.seq_len, n)


def _trail_length(trail: list[int], adjacency: Adjacency, k: int, n: int) -> float | None:
    """Total edge weight of a trail, or None if it breaks an edge or length bound."""
    total = 0.0
    seq_len = k
    last = len(trail) - 1
    for idx, (u, v) in enumerate(zip(trail, trail[1:]), start=1):
        weight = edge_weight(adjacency, u, v)
        if weight is None:
            return None
        total += weight
        seq_len += weight
        if seq_len > n + (k - 1):
            return None
        if idx == last and seq_len < n:
            return None
    return total


def update_pheromones(
    pheromone: list[list[float]],
    ants: Iterable[Ant],
    n: int,
    q: float,
    rho: float,
    global_best: BestSolution,
) -> None:
    """Evaporate all pheromone, then lay fresh trails from complete ants and the best."""
    keep = 1.0 - rho
    for row in pheromone:
        row[:] = [value * keep for value in row]

    for ant in ants:
        if ant.seq_len < n or ant.cost <= 0:
            continue
        _deposit(pheromone, ant.trail, q / ant.cost)

    if len(global_best.trail) > 1:
        _deposit(pheromone, global_best.trail, q / global_best.length)


def _deposit(pheromone: list[list[float]], trail: Sequence[int], amount: float) -> None:
    for earlier, later in zip(trail, trail[1:]):
        pheromone[later][earlier] += amount