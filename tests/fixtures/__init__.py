"""Test fixtures for GeneList-Reconciler.

Provides mock data generators and recording collaborators.
"""

from .mock_ctd import (
    create_mock_ctd,
    create_ortholog_table,
    create_species_catalogs,
    create_synonym_table,
)
from .mock_collaborators import (
    IdentityOrthologMapper,
    RecordingDatasetStandardizer,
    RecordingGeneStandardizer,
    StaticBackgroundBuilder,
)

__all__ = [
    "create_mock_ctd",
    "create_ortholog_table",
    "create_species_catalogs",
    "create_synonym_table",
    "IdentityOrthologMapper",
    "RecordingDatasetStandardizer",
    "RecordingGeneStandardizer",
    "StaticBackgroundBuilder",
]
