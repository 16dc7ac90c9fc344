"""Species resolution backed by the species registry."""

from __future__ import annotations

import logging
from typing import Optional

from ...config.species import normalize_species
from ..errors import ConfigurationError
from ..models import SpeciesPair
from .base import SpeciesResolver


class RegistrySpeciesResolver(SpeciesResolver):
    """Resolve species labels through the species registry.

    Missing labels fall back to ``default_species`` with a warning, since a
    reference dataset and gene list of unknown origin are most often mouse.

    Example:
        >>> resolver = RegistrySpeciesResolver()
        >>> resolver.resolve("Homo sapiens", None)
        SpeciesPair(genelist_species='human', sct_species='mouse')
    """

    def __init__(
        self,
        default_species: str = "mouse",
        logger: Optional[logging.Logger] = None,
    ):
        self.default_species = default_species
        self.logger = logger or logging.getLogger(__name__)

    def resolve(
        self,
        genelist_species: Optional[str],
        sct_species: Optional[str],
    ) -> SpeciesPair:
        return SpeciesPair(
            genelist_species=self._resolve_one(genelist_species, "genelist_species"),
            sct_species=self._resolve_one(sct_species, "sct_species"),
        )

    def _resolve_one(self, species: Optional[str], label: str) -> str:
        if species is None:
            self.logger.warning(
                "%s not provided. Setting to '%s' by default.",
                label,
                self.default_species,
            )
            species = self.default_species
        try:
            return normalize_species(species)
        except ValueError as e:
            raise ConfigurationError(
                f"Unrecognized {label}: '{species}'",
                error_code="E102_UNKNOWN_SPECIES",
                found=species,
                suggestion=str(e),
            ) from e
