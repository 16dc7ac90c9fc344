"""Background gene set construction from per-species gene catalogs."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd

from ...config.species import normalize_species
from ..errors import ConfigurationError
from .base import BackgroundBuilder, OrthologMapper
from .orthologs import filter_one_to_one


def unique_genes(genes: Iterable) -> List[str]:
    """Stringify and de-duplicate, keeping first-occurrence order.

    Missing values (None, NaN) are dropped rather than turned into "None"
    or "nan" symbols.
    """
    return list(dict.fromkeys(str(g) for g in genes if not pd.isna(g)))


class CatalogBackgroundBuilder(BackgroundBuilder):
    """Build a background from the genes both species share.

    When the caller supplies a background it is returned as a de-duplicated
    copy. Otherwise each species' catalog is projected onto the output
    species through one-to-one orthologs and the projections are
    intersected, so the background only holds genes that could have been
    measured in either species.

    Parameters
    ----------
    mapper : OrthologMapper
        Mapper used to project catalogs across species
    catalogs : Dict[str, Iterable[str]]
        All known gene symbols per species
    method : str
        Ortholog mapping method
    non121_strategy : str
        Handling of non one-to-one orthologs when projecting catalogs
    logger : logging.Logger, optional
        Logger instance
    """

    def __init__(
        self,
        mapper: OrthologMapper,
        catalogs: Dict[str, Iterable[str]],
        method: str = "homologene",
        non121_strategy: str = "drop_both_species",
        logger: Optional[logging.Logger] = None,
    ):
        self.mapper = mapper
        self.catalogs = {
            normalize_species(species): unique_genes(genes)
            for species, genes in catalogs.items()
        }
        self.method = method
        self.non121_strategy = non121_strategy
        self.logger = logger or logging.getLogger(__name__)

    def build(
        self,
        species1: str,
        species2: str,
        output_species: str,
        bg: Optional[Iterable[str]] = None,
    ) -> List[str]:
        if bg is not None:
            background = unique_genes(bg)
            self.logger.info("Using user-supplied background of %d genes", len(background))
            return background

        output_species = normalize_species(output_species)
        projected = [
            self._project_catalog(normalize_species(species), output_species)
            for species in dict.fromkeys([species1, species2])
        ]

        background = projected[0]
        for other in projected[1:]:
            keep = set(other)
            background = [g for g in background if g in keep]

        self.logger.info(
            "Created background of %d %s genes from %s",
            len(background),
            output_species,
            " & ".join(dict.fromkeys([species1, species2])),
        )
        return background

    def _project_catalog(self, species: str, output_species: str) -> List[str]:
        if species not in self.catalogs:
            raise ConfigurationError(
                f"No gene catalog loaded for species '{species}'",
                error_code="E102_UNKNOWN_SPECIES",
                expected=sorted(self.catalogs),
                found=species,
                suggestion="Provide a background gene list or a catalog for this species.",
            )
        genes = self.catalogs[species]
        if species == output_species:
            return list(genes)

        mapping = self.mapper.map_orthologs(
            genes,
            input_species=species,
            output_species=output_species,
            method=self.method,
        )
        mapping = filter_one_to_one(mapping, self.non121_strategy)
        return unique_genes(mapping["ortholog_gene"])
