"""Gene list reconciliation module.

Turns a hit gene list, an optional background and a reference cell-type
dataset into consistent gene sets for an enrichment test, possibly across
two species.

Example Usage
-------------
>>> from genelist_reconciler.core.reconciliation import (
...     GeneListReconciler,
...     ReconciliationRequest,
... )
>>> reconciler = GeneListReconciler(ortholog_mapper=mapper, background_builder=builder)
>>> result = reconciler.reconcile(
...     ReconciliationRequest(sct_data=ctd, hits=genes, genelist_species="human")
... )
>>> set(result.hits) & set(result.bg)
set()
"""

from ..errors import (
    ConfigurationError,
    InsufficientDataError,
    InvariantViolation,
    ReconciliationError,
)
from ..models import (
    CellTypeLevel,
    ReconciliationRequest,
    ReconciliationResult,
    ReferenceDataset,
    SpeciesPair,
)
from .config import ReconciliationConfig
from .engine import (
    GENE_SIZE_CONTROL_SPECIES,
    GeneListReconciler,
    ReconciliationState,
    check_genelist_inputs,
)

__all__ = [
    # Config
    "ReconciliationConfig",
    # Data model
    "CellTypeLevel",
    "ReconciliationRequest",
    "ReconciliationResult",
    "ReferenceDataset",
    "SpeciesPair",
    # Engine
    "GENE_SIZE_CONTROL_SPECIES",
    "GeneListReconciler",
    "ReconciliationState",
    "check_genelist_inputs",
    # Errors
    "ConfigurationError",
    "InsufficientDataError",
    "InvariantViolation",
    "ReconciliationError",
]
