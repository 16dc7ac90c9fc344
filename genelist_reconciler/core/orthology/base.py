"""Base classes for reconciliation collaborators.

Provides one abstract base class per collaborator the reconciler consumes:
- SpeciesResolver: normalizes gene list / reference dataset species labels
- BackgroundBuilder: builds or validates the background gene set
- DatasetStandardizer: converts reference dataset rows across species
- GeneStandardizer: canonicalizes symbols within one species
- OrthologMapper: projects symbols to orthologs in another species
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

import pandas as pd

from ..models import ReferenceDataset, SpeciesPair


class SpeciesResolver(ABC):
    """Abstract base class for species label resolution."""

    @abstractmethod
    def resolve(
        self,
        genelist_species: Optional[str],
        sct_species: Optional[str],
    ) -> SpeciesPair:
        """Normalize aliases and apply defaults for missing labels."""


class BackgroundBuilder(ABC):
    """Abstract base class for background gene set construction."""

    @abstractmethod
    def build(
        self,
        species1: str,
        species2: str,
        output_species: str,
        bg: Optional[Iterable[str]] = None,
    ) -> List[str]:
        """Return the background in ``output_species`` namespace.

        Parameters
        ----------
        species1 : str
            Reference dataset species
        species2 : str
            Gene list species
        output_species : str
            Namespace of the returned symbols
        bg : Iterable[str], optional
            User-supplied background; built from catalogs when None
        """


class DatasetStandardizer(ABC):
    """Abstract base class for reference dataset species conversion."""

    @abstractmethod
    def standardize(
        self,
        dataset: ReferenceDataset,
        input_species: str,
        output_species: str,
    ) -> ReferenceDataset:
        """Return a new dataset whose row identifiers use ``output_species``."""


class GeneStandardizer(ABC):
    """Abstract base class for same-species symbol canonicalization."""

    @abstractmethod
    def standardize(
        self,
        genes: Iterable[str],
        species: str,
        drop_na: bool = True,
    ) -> pd.DataFrame:
        """Return a frame with ``input`` and ``name`` columns."""


class OrthologMapper(ABC):
    """Abstract base class for cross-species symbol projection.

    The number of returned rows may differ from the number of input genes
    (one-to-many, many-to-one or dropped genes).
    """

    @abstractmethod
    def map_orthologs(
        self,
        genes: Iterable[str],
        input_species: str,
        output_species: str,
        method: str = "homologene",
    ) -> pd.DataFrame:
        """Return a frame with ``input`` and ``ortholog_gene`` columns."""
