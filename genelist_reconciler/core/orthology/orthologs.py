"""Table-driven ortholog mapping.

Ortholog tables hold one ortholog group per row and one column per species,
the layout produced by HomoloGene / BioMart exports:

    hid    human    mouse    rat
    3      ACADM    Acadm    Acadm
    5      ACADVL   Acadvl   Acadvl

Tables are keyed by method name so several sources can coexist.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd

from ...config.species import normalize_species
from ..errors import ConfigurationError
from .base import OrthologMapper

NON121_STRATEGIES = ("keep_all", "drop_both_species", "keep_first")


def filter_one_to_one(mapping: pd.DataFrame, strategy: str = "drop_both_species") -> pd.DataFrame:
    """Resolve non one-to-one rows of an ``input`` / ``ortholog_gene`` frame.

    Parameters
    ----------
    mapping : pd.DataFrame
        Frame with ``input`` and ``ortholog_gene`` columns
    strategy : str
        "keep_all": return unchanged.
        "drop_both_species": drop every row whose input or ortholog occurs
        more than once.
        "keep_first": keep the first row per input, then the first row per
        ortholog.

    Returns
    -------
    pd.DataFrame
        Filtered copy with a fresh index
    """
    if strategy not in NON121_STRATEGIES:
        raise ValueError(
            f"Unknown non121_strategy '{strategy}'. Use one of {list(NON121_STRATEGIES)}"
        )
    if strategy == "keep_all" or mapping.empty:
        return mapping.reset_index(drop=True)
    if strategy == "drop_both_species":
        mask = ~(
            mapping["input"].duplicated(keep=False)
            | mapping["ortholog_gene"].duplicated(keep=False)
        )
        return mapping[mask].reset_index(drop=True)
    first = mapping.drop_duplicates(subset="input", keep="first")
    return first.drop_duplicates(subset="ortholog_gene", keep="first").reset_index(drop=True)


class TableOrthologMapper(OrthologMapper):
    """Map gene symbols between species using ortholog group tables.

    Parameters
    ----------
    tables : Dict[str, pd.DataFrame]
        Ortholog tables keyed by method name (e.g. "homologene").
        Column names are species labels; unknown columns are ignored.
    non121_strategy : str
        Default handling of non one-to-one orthologs (see
        :func:`filter_one_to_one`). "keep_all" preserves every pair.
    logger : logging.Logger, optional
        Logger instance

    Example
    -------
    >>> mapper = TableOrthologMapper({"homologene": table})
    >>> mapper.map_orthologs(["Acadm"], "mouse", "human")
        input ortholog_gene
    0   Acadm         ACADM
    """

    def __init__(
        self,
        tables: Dict[str, pd.DataFrame],
        non121_strategy: str = "keep_all",
        logger: Optional[logging.Logger] = None,
    ):
        if non121_strategy not in NON121_STRATEGIES:
            raise ValueError(
                f"Unknown non121_strategy '{non121_strategy}'. "
                f"Use one of {list(NON121_STRATEGIES)}"
            )
        self.non121_strategy = non121_strategy
        self.logger = logger or logging.getLogger(__name__)
        self.tables = {
            method.lower(): self._normalize_columns(table)
            for method, table in tables.items()
        }

    @staticmethod
    def _normalize_columns(table: pd.DataFrame) -> pd.DataFrame:
        renamed = {}
        for col in table.columns:
            try:
                renamed[col] = normalize_species(str(col))
            except ValueError:
                continue
        normalized = table[list(renamed)].rename(columns=renamed)
        return normalized.loc[:, ~normalized.columns.duplicated()]

    @property
    def methods(self) -> List[str]:
        return sorted(self.tables)

    def species_for(self, method: str = "homologene") -> List[str]:
        """Species covered by the table behind ``method``."""
        return list(self._get_table(method).columns)

    def _get_table(self, method: str) -> pd.DataFrame:
        key = method.lower()
        if key not in self.tables:
            raise ConfigurationError(
                f"No ortholog table loaded for method '{method}'",
                error_code="E103_UNKNOWN_METHOD",
                expected=self.methods,
                found=method,
            )
        return self.tables[key]

    def _pairs(self, input_species: str, output_species: str, method: str) -> pd.DataFrame:
        table = self._get_table(method)
        missing = [s for s in (input_species, output_species) if s not in table.columns]
        if missing:
            raise ConfigurationError(
                f"Ortholog table '{method}' has no column for {missing}",
                error_code="E102_UNKNOWN_SPECIES",
                expected=list(table.columns),
                found=missing,
            )
        pairs = table[[input_species, output_species]].dropna()
        pairs = pairs.astype(str)
        pairs.columns = ["input", "ortholog_gene"]
        pairs = pairs[(pairs["input"].str.strip() != "") & (pairs["ortholog_gene"].str.strip() != "")]
        return pairs.drop_duplicates().reset_index(drop=True)

    def map_orthologs(
        self,
        genes: Iterable[str],
        input_species: str,
        output_species: str,
        method: str = "homologene",
        non121_strategy: Optional[str] = None,
    ) -> pd.DataFrame:
        """Project ``genes`` onto ``output_species`` orthologs.

        Same-species requests are an identity pass. Cross-species output
        follows input order, then table order; genes without an ortholog
        are dropped.

        Returns
        -------
        pd.DataFrame
            Columns ``input`` and ``ortholog_gene``
        """
        genes = [str(g) for g in genes]
        input_species = normalize_species(input_species)
        output_species = normalize_species(output_species)

        if input_species == output_species:
            return pd.DataFrame({"input": genes, "ortholog_gene": genes})

        pairs = filter_one_to_one(
            self._pairs(input_species, output_species, method),
            non121_strategy or self.non121_strategy,
        )
        mapping = pd.DataFrame({"input": genes}).merge(pairs, on="input", how="inner")

        n_mapped = mapping["input"].nunique()
        self.logger.debug(
            "Mapped %d/%d %s genes to %d %s orthologs (%s)",
            n_mapped,
            len(set(genes)),
            input_species,
            len(mapping),
            output_species,
            method,
        )
        return mapping
