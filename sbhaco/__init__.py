"""Sequencing by hybridization: overlap graphs, an ant colony search and instance files."""

__version__ = "0.1.0"