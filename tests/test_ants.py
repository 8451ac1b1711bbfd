import random

import pytest

from sbhaco.ants import (
    Ant,
    BestSolution,
    Settings,
    choose_random,
    two_opt_on_trail,
    update_pheromones,
)
from sbhaco.sbh import build_adjacency

KMERS = ["AAB", "BCD", "ABC", "CDE"]


def _ant(trail, cost, seq_len):
    ant = Ant(len(KMERS), len(KMERS))
    ant.trail = list(trail)
    ant.cost = cost
    ant.seq_len = seq_len
    return ant


def test_new_ant_is_empty():
    ant = Ant(5, 7)
    assert ant.trail == []
    assert ant.trail_len == 0
    assert ant.used_count == [0] * 7
    assert ant.cost == 0.0
    assert ant.max_steps == 5


def test_best_solution_starts_unbeaten():
    best = BestSolution()
    assert best.length > 1e300
    assert best.trail == []
    assert best.sequence == ""


def test_settings_override_keeps_other_defaults():
    settings = Settings(num_ants=35, rho=0.7)
    assert settings.num_ants == 35
    assert settings.rho == 0.7
    assert settings.max_iter == 1000
    assert settings.alpha == 1.0


def test_choose_random_returns_candidate():
    candidates = [(1, 2), (3, 4), (5, 6)]
    rng = random.Random(1)
    picks = {choose_random(candidates, rng) for _ in range(100)}
    assert picks <= set(candidates)
    assert len(picks) == 3


def test_choose_random_is_reproducible():
    candidates = [(i, i) for i in range(20)]
    first = [choose_random(candidates, random.Random(7)) for _ in range(3)]
    second = [choose_random(candidates, random.Random(7)) for _ in range(3)]
    assert first == second


def test_choose_random_empty_raises():
    with pytest.raises(IndexError):
        choose_random([], random.Random(0))


def test_two_opt_short_trail_unchanged():
    adjacency = build_adjacency(KMERS, 3)
    ant = _ant([0, 2, 1], 10.0, 4)
    two_opt_on_trail(ant, KMERS, 3, 6, adjacency, 20, random.Random(0))
    assert ant.trail == [0, 2, 1]
    assert ant.cost == 10.0


def test_two_opt_applies_improving_reversal():
    adjacency = build_adjacency(KMERS, 3)
    ant = _ant([0, 1, 2, 3], 10.0, 4)
    two_opt_on_trail(ant, KMERS, 3, 6, adjacency, 5, random.Random(3))
    assert ant.trail == [0, 2, 1, 3]
    assert ant.cost == 3.0
    assert ant.seq_len == 6


def test_two_opt_keeps_cheaper_trail():
    adjacency = build_adjacency(KMERS, 3)
    ant = _ant([0, 1, 2, 3], 2.0, 4)
    two_opt_on_trail(ant, KMERS, 3, 6, adjacency, 20, random.Random(3))
    assert ant.trail == [0, 1, 2, 3]
    assert ant.cost == 2.0
    assert ant.seq_len == 4


def test_two_opt_rejects_too_long_sequence():
    adjacency = build_adjacency(KMERS, 3)
    ant = _ant([0, 1, 2, 3], 10.0, 4)
    # With n = 3 the reversed trail spells more than n + k - 1 letters.
    two_opt_on_trail(ant, KMERS, 3, 3, adjacency, 20, random.Random(3))
    assert ant.trail == [0, 1, 2, 3]
    assert ant.cost == 10.0


def test_two_opt_result_is_permutation_and_not_worse():
    adjacency = build_adjacency(KMERS, 3)
    rng = random.Random(11)
    for _ in range(10):
        trail = [0, 1, 2, 3]
        rng.shuffle(trail)
        ant = _ant(trail, 5.0, 4)
        two_opt_on_trail(ant, KMERS, 3, 6, adjacency, 10, rng)
        assert sorted(ant.trail) == [0, 1, 2, 3]
        assert ant.cost <= 5.0
        assert ant.trail[0] == trail[0]
        assert ant.trail[-1] == trail[-1]


def test_update_pheromones_evaporates():
    pheromone = [[1.0, 1.0], [1.0, 1.0]]
    update_pheromones(pheromone, [], 5, 1.0, 0.5, BestSolution())
    assert pheromone == [[0.5, 0.5], [0.5, 0.5]]


def test_update_pheromones_deposits_backwards_along_trail():
    pheromone = [[0.0] * 3 for _ in range(3)]
    ant = Ant(3, 3)
    ant.trail = [0, 1, 2]
    ant.cost = 2.0
    ant.seq_len = 5
    update_pheromones(pheromone, [ant], 5, 2.0, 0.0, BestSolution())
    assert pheromone[1][0] == 1.0
    assert pheromone[2][1] == 1.0
    assert pheromone[0][1] == 0.0
    assert sum(map(sum, pheromone)) == 2.0


def test_update_pheromones_skips_incomplete_ant():
    pheromone = [[0.0] * 3 for _ in range(3)]
    ant = Ant(3, 3)
    ant.trail = [0, 1, 2]
    ant.cost = 2.0
    ant.seq_len = 4
    update_pheromones(pheromone, [ant], 5, 2.0, 0.0, BestSolution())
    assert pheromone == [[0.0] * 3 for _ in range(3)]


def test_update_pheromones_skips_zero_cost_ant():
    pheromone = [[0.0] * 2 for _ in range(2)]
    ant = Ant(2, 2)
    ant.trail = [0, 1]
    ant.cost = 0.0
    ant.seq_len = 9
    update_pheromones(pheromone, [ant], 5, 2.0, 0.0, BestSolution())
    assert pheromone == [[0.0, 0.0], [0.0, 0.0]]


def test_update_pheromones_reinforces_global_best():
    pheromone = [[0.0] * 3 for _ in range(3)]
    best = BestSolution(length=2.0, trail=[2, 0], sequence="ABCD", dist=4)
    update_pheromones(pheromone, [], 5, 2.0, 0.0, best)
    assert pheromone[0][2] == 1.0
    assert sum(map(sum, pheromone)) == 1.0


def test_update_pheromones_ignores_single_node_best():
    pheromone = [[1.0, 1.0], [1.0, 1.0]]
    best = BestSolution(length=1.0, trail=[0])
    update_pheromones(pheromone, [], 5, 2.0, 0.0, best)
    assert pheromone == [[1.0, 1.0], [1.0, 1.0]]