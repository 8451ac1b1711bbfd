# sbhaco

Rebuilds DNA sequences from their k-mer spectra, a task called sequencing by
hybridization. The spectrum becomes an overlap graph, and an ant colony search
looks for the cheapest walk through it that spells a sequence of the wanted
length. The search allows for negative errors (missing k-mers), positive errors
(spurious k-mers) and repeated k-mers.

## Installation

```
pip install .
```

The package needs nothing outside the Python standard library. To run the
tests, install the `test` extra (`pip install .[test]`) and run `pytest`.

## Command line

```
sbhaco instance-50-300.txt expected-50-300.txt
```

The first file holds one or more instances. The second holds the expected
sequences, one per line, in the same order as the instances. For each instance
the command prints the instance's parameters, runs the ant colony search
(35 ants, 1000 iterations, no time limit), prints the first 50 letters of the
expected and the rebuilt sequence, and prints the Levenshtein distance between
them. A summary with the number of instances and the average distance (rounded
down) comes last.

The command exits with status 1 when it is not given exactly two files, when a
file cannot be read or is malformed, when the two files hold different numbers
of entries, or when a spectrum is empty or holds a k-mer whose length is not k.

### Instance file format

Lines that are empty or start with `#` are skipped before each instance. An
instance is made of these lines:

```
n              target sequence length
k              k-mer length
start_oligo    the first k-mer of the sequence
neg_errors     number of negative errors
has_repeats    1 if the sequence has repeats, anything else otherwise
pos_errors     number of positive errors
kmer           one k-mer per line, up to an empty line or the end of file
...
```

Numeric lines are read by their leading integer. A file that ends before an
instance's six header lines are complete raises `InstanceFormatError`.

In the file of expected sequences, lines that are empty or start with `#` are
skipped.

## Library use

```python
from sbhaco.sbh import generate_kmers, sequencing_by_hybridization_with_start
from sbhaco.colony import run_aco
from sbhaco.levenshtein import levenshtein_score

target = "ACGTTGCATGCA"
kmers = generate_kmers(target, 4)

exact = sequencing_by_hybridization_with_start(kmers, 4, len(target), kmers[0])
found = run_aco(kmers, 4, len(target), kmers[0], 0, False, 0,
                num_ants=10, max_time=0, max_iter=20, seed=1)
print(levenshtein_score(found, target))
```

`run_aco` stops after `max_time` seconds or `max_iter` iterations, whichever
positive limit is reached first; `seed` makes a run repeatable. Its defaults
come from `sbhaco.ants.Settings` (30 ants, alpha 1.0, beta 2.0, rho 0.5, q 1.0,
tau0 1.0, 120 seconds, 1000 iterations). When the start k-mer is not in the
spectrum, each ant starts from a random k-mer.

The modules:

- `sbhaco.sbh`: the overlap graph (`build_adjacency`, `Edge`,
  `InvalidKmerError`), `reconstruct_sequence`, `edge_weight`,
  `find_eulerian_path`, `find_hamiltonian_path`, `find_path_from_start`,
  `is_connected`, `dijkstra_shortest_path`, `generate_kmers`, and the
  graph-based solvers `sequencing_by_hybridization` and
  `sequencing_by_hybridization_with_start`. Progress is reported through the
  `logging` module.
- `sbhaco.ants`: `Ant`, `BestSolution`, `Settings`, `choose_random`,
  `two_opt_on_trail` and `update_pheromones`.
- `sbhaco.colony`: `update_ants` and `run_aco`.
- `sbhaco.instances`: `SBHInstance`, `InstanceFormatError`, `parse_instances`
  and `read_instances`, plus a reader for files of expected sequences.
- `sbhaco.levenshtein`: `levenshtein_score`.
- `sbhaco.cli`: `main`, the function behind the `sbhaco` command.