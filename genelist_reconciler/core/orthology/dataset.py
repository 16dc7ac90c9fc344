"""Cross-species conversion of reference cell-type datasets."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import numpy as np
import pandas as pd

from ...config.species import normalize_species
from ..models import CellTypeLevel, ReferenceDataset
from .base import DatasetStandardizer, OrthologMapper
from .orthologs import filter_one_to_one


def compute_specificity(mean_exp: pd.DataFrame) -> pd.DataFrame:
    """Specificity as each cell type's share of a gene's total expression.

    Genes with zero total expression get zero specificity.
    """
    totals = mean_exp.sum(axis=1).to_numpy(dtype=float)
    values = mean_exp.to_numpy(dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        spec = np.where(totals[:, None] > 0, values / totals[:, None], 0.0)
    return pd.DataFrame(spec, index=mean_exp.index, columns=mean_exp.columns)


class OrthologDatasetStandardizer(DatasetStandardizer):
    """Translate reference dataset rows into another species' symbols.

    Every level is converted with the same gene mapping. Rows without a
    one-to-one ortholog are dropped.

    Parameters
    ----------
    mapper : OrthologMapper
        Mapper used to translate row identifiers
    method : str
        Ortholog mapping method
    non121_strategy : str
        Handling of non one-to-one orthologs
    recompute_specificity : bool
        Recompute specificity from converted mean expression instead of
        converting the stored specificity matrix
    logger : logging.Logger, optional
        Logger instance
    """

    def __init__(
        self,
        mapper: OrthologMapper,
        method: str = "homologene",
        non121_strategy: str = "drop_both_species",
        recompute_specificity: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        self.mapper = mapper
        self.method = method
        self.non121_strategy = non121_strategy
        self.recompute_specificity = recompute_specificity
        self.logger = logger or logging.getLogger(__name__)

    def standardize(
        self,
        dataset: ReferenceDataset,
        input_species: str,
        output_species: str,
    ) -> ReferenceDataset:
        input_species = normalize_species(input_species)
        output_species = normalize_species(output_species)

        genes = list(dict.fromkeys(g for level in dataset for g in level.genes))
        mapping = self.mapper.map_orthologs(
            genes,
            input_species=input_species,
            output_species=output_species,
            method=self.method,
        )
        mapping = filter_one_to_one(mapping, self.non121_strategy)
        # keep_all may leave many-to-one rows; first ortholog per gene wins
        gene_map: Dict[str, str] = {}
        for source, target in zip(mapping["input"], mapping["ortholog_gene"]):
            gene_map.setdefault(source, target)

        levels = [self._convert_level(level, gene_map) for level in dataset]
        if levels:
            self.logger.info(
                "Converted reference dataset %s -> %s: %d/%d genes kept",
                input_species,
                output_species,
                len(levels[0].mean_exp),
                len(dataset[0].mean_exp),
            )
        return ReferenceDataset(levels=levels, species=output_species)

    def _convert_level(self, level: CellTypeLevel, gene_map: Dict[str, str]) -> CellTypeLevel:
        mean_exp = self._convert_matrix(level.mean_exp, gene_map)
        if self.recompute_specificity:
            specificity = compute_specificity(mean_exp)
        elif level.specificity is not None:
            specificity = self._convert_matrix(level.specificity, gene_map)
        else:
            specificity = None
        return CellTypeLevel(mean_exp=mean_exp, specificity=specificity, name=level.name)

    @staticmethod
    def _convert_matrix(matrix: pd.DataFrame, gene_map: Dict[str, str]) -> pd.DataFrame:
        rows = [str(g) for g in matrix.index]
        keep = [g in gene_map for g in rows]
        converted = matrix.loc[keep].copy()
        converted.index = pd.Index(
            [gene_map[g] for g, k in zip(rows, keep) if k],
            name=matrix.index.name,
        )
        # Many-to-one leftovers collapse onto their first row
        return converted[~converted.index.duplicated(keep="first")]
