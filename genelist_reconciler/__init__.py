"""GeneList-Reconciler: gene list preparation for cell-type enrichment tests.

This package provides tools for:
- Resolving species labels for a gene list and a reference dataset
- Building or validating a background gene set
- Projecting gene lists and reference datasets into one species namespace
- Filtering hits, background and reference genes into a consistent universe

Species, ortholog and synonym references are loaded from tables rather than
hardcoded, so the same code serves any pair of supported species.

Example usage:
    >>> from genelist_reconciler.core.reconciliation import check_genelist_inputs
    >>>
    >>> checked = check_genelist_inputs(
    ...     sct_data=ctd,
    ...     hits=example_genelist,
    ...     sct_species="mouse",
    ...     genelist_species="human",
    ...     ortholog_mapper=mapper,
    ...     background_builder=builder,
    ... )
    >>> checked.hits[:3]
"""

__version__ = "0.1.0"
