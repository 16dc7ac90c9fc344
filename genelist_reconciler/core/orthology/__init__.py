"""Species, ortholog and background collaborators for reconciliation.

The reconciler only depends on the abstract base classes in ``base``; the
table-driven implementations here let it run from user-supplied reference
tables (ortholog groups, synonyms, per-species gene catalogs).

Example Usage
-------------
>>> from genelist_reconciler.core.orthology import (
...     TableOrthologMapper,
...     CatalogBackgroundBuilder,
... )
>>> mapper = TableOrthologMapper({"homologene": ortholog_table})
>>> builder = CatalogBackgroundBuilder(mapper, catalogs)
>>> bg = builder.build("mouse", "human", "human")
"""

from .base import (
    BackgroundBuilder,
    DatasetStandardizer,
    GeneStandardizer,
    OrthologMapper,
    SpeciesResolver,
)
from .background import CatalogBackgroundBuilder, unique_genes
from .dataset import OrthologDatasetStandardizer, compute_specificity
from .genes import TableGeneStandardizer
from .orthologs import NON121_STRATEGIES, TableOrthologMapper, filter_one_to_one
from .species import RegistrySpeciesResolver

__all__ = [
    # Interfaces
    "BackgroundBuilder",
    "DatasetStandardizer",
    "GeneStandardizer",
    "OrthologMapper",
    "SpeciesResolver",
    # Implementations
    "CatalogBackgroundBuilder",
    "OrthologDatasetStandardizer",
    "RegistrySpeciesResolver",
    "TableGeneStandardizer",
    "TableOrthologMapper",
    # Helpers
    "NON121_STRATEGIES",
    "compute_specificity",
    "filter_one_to_one",
    "unique_genes",
]
