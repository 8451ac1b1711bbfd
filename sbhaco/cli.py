"""Command line entry point: solve every instance and score it against the original."""

from __future__ import annotations

import sys
from typing import Sequence

from .colony import run_aco
from .instances import InstanceFormatError, read_instances, read_original_sequences
from .levenshtein import levenshtein_score
from .sbh import InvalidKmerError

_PROGRAM = "sbhaco"


def main(argv: Sequence[str] | None = None) -> int:
    """Run the solver on an instance file and compare with the original sequences."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print(f"Usage: {_PROGRAM} <instance_file> <original_file>")
        print(f"Example: {_PROGRAM} instance-50-300.txt original-50-300.txt")
        return 1

    instance_file, original_file = args
    try:
        print(f"INFO: Reading instances from: {instance_file}")
        instances = read_instances(instance_file)
        print(f"INFO: Reading original sequences from: {original_file}")
        originals = read_original_sequences(original_file)
    except (OSError, InstanceFormatError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if len(instances) != len(originals):
        print(
            f"ERROR: Number of instances ({len(instances)}) doesn't match "
            f"number of original sequences ({len(originals)})",
            file=sys.stderr,
        )
        return 1

    print(f"INFO: Processing {len(instances)} instance(s)...\n")

    total = 0
    for number, (instance, original) in enumerate(zip(instances, originals), start=1):
        print(f"=== Instance {number} ===")
        print(f"Target length: {instance.n}")
        print(f"K-mer length: {instance.k}")
        print(f"Spectrum size: {len(instance.spectrum)}")
        print(f"Start oligo: {instance.start_oligo}")
        print(f"Negative errors: {instance.neg_errors}")
        print(f"Positive errors: {instance.pos_errors}")
        print(f"Has repeats: {'Yes' if instance.has_repeats else 'No'}")

        try:
            reconstructed = run_aco(
                instance.spectrum,
                instance.k,
                instance.n,
                instance.start_oligo,
                instance.neg_errors,
                instance.has_repeats,
                instance.pos_errors,
                num_ants=35,
                alpha=1.0,
                beta=2.0,
                rho=0.7,
                q=0.3,
                tau0=0.5,
                max_time=0,
                max_iter=1000,
            )
        except (InvalidKmerError, ValueError) as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

        score = levenshtein_score(reconstructed, original)
        total += score

        print(f"Original:      {original[:50]}...")
        print(f"Reconstructed: {reconstructed[:50]}...")
        print(f"Levenshtein score: {score}")

    average = total // len(instances) if instances else 0
    print("=== SUMMARY ===")
    print(f"Total instances: {len(instances)}")
    print(f"Average Levenshtein score: {average}")
    return 0


if __name__ == "__main__":
    sys.exit(main())