"""Centralized configuration for GeneList-Reconciler.

This module provides the species registry that every collaborator uses to
normalize species labels.

Example
-------
>>> from genelist_reconciler.config import get_species_config, list_available_species
>>>
>>> print(list_available_species()[:3])
['fly', 'human', 'macaque']
>>>
>>> config = get_species_config("Homo sapiens")
>>> print(config.species_name, config.taxonomy_id)
human 9606
"""

from .species import (
    SpeciesConfig,
    get_species_config,
    list_available_species,
    list_species_aliases,
    normalize_species,
    register_species_config,
)

__all__ = [
    "SpeciesConfig",
    "get_species_config",
    "list_available_species",
    "list_species_aliases",
    "normalize_species",
    "register_species_config",
]
