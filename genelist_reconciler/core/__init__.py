"""Core modules for GeneList-Reconciler.

This package contains:
- reconciliation: the gene list reconciliation engine
- orthology: species, ortholog, synonym and background collaborators
- models: reference dataset, request and result types
- errors: reconciliation error taxonomy
"""
