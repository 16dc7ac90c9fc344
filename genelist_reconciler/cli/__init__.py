"""Command-line interface for GeneList-Reconciler.

Example Usage
-------------
    genelist-reconciler --help
    genelist-reconciler reconcile --hits hits.txt --sct-data ctd/ \
        --orthologs homologene.tsv --bg bg.txt --out checked/
    genelist-reconciler species
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
