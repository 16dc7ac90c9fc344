"""Same-species gene symbol standardization from a synonym table."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

import pandas as pd

from ...config.species import normalize_species
from ..errors import ConfigurationError
from .base import GeneStandardizer

SYNONYM_COLUMNS = ["species", "alias", "name"]


class TableGeneStandardizer(GeneStandardizer):
    """Canonicalize gene symbols using a synonym table.

    The table has one row per alias with columns ``species``, ``alias`` and
    ``name`` (the canonical symbol). Lookup is case-insensitive and every
    canonical name also resolves to itself.

    Parameters
    ----------
    synonyms : pd.DataFrame
        Synonym table
    logger : logging.Logger, optional
        Logger instance
    """

    def __init__(
        self,
        synonyms: pd.DataFrame,
        logger: Optional[logging.Logger] = None,
    ):
        missing = [c for c in SYNONYM_COLUMNS if c not in synonyms.columns]
        if missing:
            raise ValueError(f"Synonym table missing columns: {missing}")
        self.logger = logger or logging.getLogger(__name__)
        self._lookup = self._build_lookup(synonyms)

    @staticmethod
    def _build_lookup(synonyms: pd.DataFrame) -> Dict[str, Dict[str, str]]:
        lookup: Dict[str, Dict[str, str]] = {}
        table = synonyms.dropna(subset=["species", "name"])
        for species, group in table.groupby("species", sort=False):
            species_key = normalize_species(str(species))
            mapping = lookup.setdefault(species_key, {})
            # Canonical names win over aliases that collide with them
            for name in group["name"].astype(str):
                mapping[name.lower()] = name
            for alias, name in zip(group["alias"], group["name"].astype(str)):
                if pd.isna(alias):
                    continue
                mapping.setdefault(str(alias).lower(), name)
        return lookup

    def standardize(
        self,
        genes: Iterable[str],
        species: str,
        drop_na: bool = True,
    ) -> pd.DataFrame:
        """Return canonical names for ``genes`` within ``species``.

        Returns
        -------
        pd.DataFrame
            Columns ``input`` and ``name``; unmapped genes are dropped when
            ``drop_na`` is True, otherwise kept with ``name`` None.
        """
        species_key = normalize_species(species)
        if species_key not in self._lookup:
            raise ConfigurationError(
                f"No synonym table rows for species '{species_key}'",
                error_code="E102_UNKNOWN_SPECIES",
                expected=sorted(self._lookup),
                found=species_key,
            )
        mapping = self._lookup[species_key]

        genes = [str(g) for g in genes]
        names = [mapping.get(g.lower()) for g in genes]
        result = pd.DataFrame({"input": genes, "name": names})
        if drop_na:
            n_before = len(result)
            result = result[result["name"].notna()].reset_index(drop=True)
            if len(result) < n_before:
                self.logger.debug(
                    "Dropped %d %s genes without a canonical name",
                    n_before - len(result),
                    species_key,
                )
        return result
