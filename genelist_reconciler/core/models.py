"""Data model shared by the reconciler and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

import pandas as pd


@dataclass
class CellTypeLevel:
    """One annotation level of a cell-type dataset.

    Attributes:
        mean_exp: Mean expression, genes (rows) x cell types (columns).
        specificity: Optional specificity matrix with the same layout.
        name: Level label, e.g. "level1".
    """

    mean_exp: pd.DataFrame
    specificity: Optional[pd.DataFrame] = None
    name: str = ""

    @property
    def genes(self) -> List[str]:
        return [str(g) for g in self.mean_exp.index]

    @property
    def cell_types(self) -> List[str]:
        return [str(c) for c in self.mean_exp.columns]

    def copy(self) -> "CellTypeLevel":
        return CellTypeLevel(
            mean_exp=self.mean_exp.copy(),
            specificity=self.specificity.copy() if self.specificity is not None else None,
            name=self.name,
        )


@dataclass
class ReferenceDataset:
    """Reference cell-type dataset (CTD): an ordered list of levels.

    Only the first level's row identifiers define the reference gene
    universe used during reconciliation.

    Attributes:
        levels: Annotation levels, coarsest first.
        species: Species whose gene symbols index the rows, if known.
    """

    levels: List[CellTypeLevel] = field(default_factory=list)
    species: Optional[str] = None

    def __len__(self) -> int:
        return len(self.levels)

    def __iter__(self) -> Iterator[CellTypeLevel]:
        return iter(self.levels)

    def __getitem__(self, index: int) -> CellTypeLevel:
        return self.levels[index]

    def gene_universe(self) -> List[str]:
        """Return the first level's row identifiers as a plain list."""
        if not self.levels:
            raise ValueError("Reference dataset has no levels")
        return self.levels[0].genes

    def copy(self) -> "ReferenceDataset":
        return ReferenceDataset(
            levels=[level.copy() for level in self.levels],
            species=self.species,
        )


@dataclass(frozen=True)
class SpeciesPair:
    """Resolved species for the gene list and the reference dataset."""

    genelist_species: str
    sct_species: str


@dataclass
class ReconciliationRequest:
    """Inputs for one reconciliation call.

    Attributes:
        sct_data: Reference cell-type dataset.
        hits: Candidate gene list.
        bg: Optional user background gene list.
        genelist_species: Species of ``hits``; resolved when None.
        sct_species: Species of ``sct_data``; resolved when None.
        output_species: Namespace every returned symbol is expressed in.
        gene_size_control: Keep hits and background beyond the genes
            measured in ``sct_data``. Requires a human gene list.
        standardise: Canonicalize same-species hits instead of passing them
            through the ortholog mapper.
    """

    sct_data: ReferenceDataset
    hits: Sequence[Any]
    bg: Optional[Sequence[Any]] = None
    genelist_species: Optional[str] = None
    sct_species: Optional[str] = None
    output_species: str = "human"
    gene_size_control: bool = False
    standardise: bool = False


@dataclass
class ReconciliationResult:
    """Reconciled gene lists ready for an enrichment test.

    Attributes:
        hits: Hit genes, all present in the background universe.
        sct_genes: Reference dataset genes present in the background universe.
        sct_data: Reference dataset in the output species namespace.
        bg: Background genes, disjoint from ``hits``.
        genelist_species: Resolved gene list species.
        sct_species: Resolved reference dataset species.
        output_species: Namespace of every returned symbol.
        provenance: Per-step gene counts for reproducibility.
    """

    hits: List[str]
    sct_genes: List[str]
    sct_data: ReferenceDataset
    bg: List[str]
    genelist_species: str
    sct_species: str
    output_species: str
    provenance: Dict[str, Any] = field(default_factory=dict)

    def summary(self) -> Dict[str, Any]:
        """Return counts and species labels (no gene lists)."""
        return {
            "n_hits": len(self.hits),
            "n_bg": len(self.bg),
            "n_sct_genes": len(self.sct_genes),
            "genelist_species": self.genelist_species,
            "sct_species": self.sct_species,
            "output_species": self.output_species,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (dataset excluded)."""
        return {
            **self.summary(),
            "hits": list(self.hits),
            "bg": list(self.bg),
            "sct_genes": list(self.sct_genes),
            "provenance": dict(self.provenance),
        }
