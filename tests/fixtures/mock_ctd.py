"""Mock reference dataset and reference table generators for testing.

Human symbols are upper case (``GENE1``), mouse symbols title case
(``Gene1``), so cross-species mistakes show up as failed lookups.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from genelist_reconciler.core.models import CellTypeLevel, ReferenceDataset
from genelist_reconciler.core.orthology.dataset import compute_specificity

DEFAULT_CELL_TYPES = ["astrocytes", "microglia", "neurons", "oligodendrocytes"]


def create_mock_ctd(
    genes: Sequence[str],
    cell_types: Optional[List[str]] = None,
    n_levels: int = 2,
    species: Optional[str] = None,
    seed: int = 42,
) -> ReferenceDataset:
    """Create a mock reference cell-type dataset.

    Parameters
    ----------
    genes : Sequence[str]
        Row identifiers, in order
    cell_types : List[str], optional
        Level-1 cell types; deeper levels split each into two subtypes
    n_levels : int
        Number of annotation levels
    species : str, optional
        Species tag
    seed : int
        Random seed for reproducibility

    Returns
    -------
    ReferenceDataset
        Dataset with lognormal mean expression and matching specificity
    """
    rng = np.random.default_rng(seed)
    if cell_types is None:
        cell_types = DEFAULT_CELL_TYPES

    levels = []
    columns = list(cell_types)
    for level in range(1, n_levels + 1):
        values = rng.lognormal(mean=0, sigma=1, size=(len(genes), len(columns)))
        mean_exp = pd.DataFrame(values, index=pd.Index(list(genes), name="gene"), columns=columns)
        levels.append(
            CellTypeLevel(
                mean_exp=mean_exp,
                specificity=compute_specificity(mean_exp),
                name=f"level{level}",
            )
        )
        columns = [f"{c}_{i}" for c in columns for i in (1, 2)]

    return ReferenceDataset(levels=levels, species=species)


def create_ortholog_table(n_genes: int = 20) -> pd.DataFrame:
    """Create a human/mouse ortholog group table.

    Rows 1..n_genes are one-to-one (``GENEi`` <-> ``Genei``). Extra rows:
    ``DUPA`` maps to ``Dupa1`` and ``Dupa2`` (one-to-many), ``HUMANONLY`` has
    no mouse ortholog.
    """
    rows = [
        {"hid": i, "human": f"GENE{i}", "mouse": f"Gene{i}"}
        for i in range(1, n_genes + 1)
    ]
    rows.append({"hid": 900, "human": "DUPA", "mouse": "Dupa1"})
    rows.append({"hid": 900, "human": "DUPA", "mouse": "Dupa2"})
    rows.append({"hid": 901, "human": "HUMANONLY", "mouse": None})
    return pd.DataFrame(rows)


def create_species_catalogs(n_genes: int = 20) -> Dict[str, List[str]]:
    """Create human and mouse gene catalogs matching the ortholog table."""
    return {
        "human": [f"GENE{i}" for i in range(1, n_genes + 1)] + ["DUPA", "HUMANONLY"],
        "mouse": [f"Gene{i}" for i in range(1, n_genes + 1)] + ["Dupa1", "Dupa2", "MouseOnly"],
    }


def create_synonym_table(n_genes: int = 20) -> pd.DataFrame:
    """Create a synonym table: ``ALIASi`` -> ``GENEi`` (human), ``Aliasi`` -> ``Genei`` (mouse)."""
    rows = []
    for i in range(1, n_genes + 1):
        rows.append({"species": "human", "alias": f"ALIAS{i}", "name": f"GENE{i}"})
        rows.append({"species": "mouse", "alias": f"Alias{i}", "name": f"Gene{i}"})
    return pd.DataFrame(rows)
