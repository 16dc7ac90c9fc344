"""Centralized species configuration.

This module provides the registry used to turn user-facing species labels
("Homo sapiens", "hsapiens", "9606", "mmusculus") into the canonical names
that every other module keys on.

Example
-------
>>> from genelist_reconciler.config import normalize_species
>>> normalize_species("Mus musculus")
'mouse'
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml


@dataclass
class SpeciesConfig:
    """Configuration for one species.

    Attributes
    ----------
    species_name : str
        Canonical species name (lowercase, underscores)
    scientific_name : str
        Binomial name, e.g. "Homo sapiens"
    taxonomy_id : int, optional
        NCBI taxonomy identifier
    aliases : List[str]
        Alternative names for this species
    """

    species_name: str
    scientific_name: str = ""
    taxonomy_id: Optional[int] = None
    aliases: List[str] = field(default_factory=list)

    def all_names(self) -> List[str]:
        """Return every label that resolves to this species.

        Includes the canonical name, scientific name, the gProfiler-style
        short form ("hsapiens"), the taxonomy id and all aliases.
        """
        names = [self.species_name]
        if self.scientific_name:
            names.append(self.scientific_name)
            parts = self.scientific_name.lower().split()
            if len(parts) == 2:
                names.append(f"{parts[0][0]}{parts[1]}")
        if self.taxonomy_id is not None:
            names.append(str(self.taxonomy_id))
        names.extend(self.aliases)
        return names

    @classmethod
    def from_yaml(cls, path: Path) -> "SpeciesConfig":
        """Load species config from YAML file.

        Parameters
        ----------
        path : Path
            Path to YAML file

        Returns
        -------
        SpeciesConfig
            Loaded configuration
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        taxonomy_id = data.get("taxonomy_id")
        return cls(
            species_name=data.get("species", ""),
            scientific_name=data.get("scientific_name", ""),
            taxonomy_id=int(taxonomy_id) if taxonomy_id is not None else None,
            aliases=[str(a) for a in data.get("aliases", [])],
        )


BUILTIN_SPECIES = [
    SpeciesConfig("human", "Homo sapiens", 9606, ["hs", "hsa", "homo_sapiens"]),
    SpeciesConfig("mouse", "Mus musculus", 10090, ["mm", "mmu", "mus_musculus"]),
    SpeciesConfig("rat", "Rattus norvegicus", 10116, ["rn", "rno", "rattus_norvegicus"]),
    SpeciesConfig("zebrafish", "Danio rerio", 7955, ["dr", "dre", "danio_rerio"]),
    SpeciesConfig("fly", "Drosophila melanogaster", 7227, ["dm", "dme", "fruit_fly"]),
    SpeciesConfig("worm", "Caenorhabditis elegans", 6239, ["ce", "cel", "c_elegans"]),
    SpeciesConfig("yeast", "Saccharomyces cerevisiae", 4932, ["sc", "sce"]),
]


# =============================================================================
# Registry
# =============================================================================

# Global registry of species configurations
SPECIES_CONFIG_REGISTRY: Dict[str, SpeciesConfig] = {}

# Aliases map every alternative label to canonical names
SPECIES_ALIASES: Dict[str, str] = {}

# Flag to track if builtin configs have been loaded
_BUILTINS_LOADED = False


def _normalize_key(name: str) -> str:
    return str(name).strip().lower().replace(" ", "_").replace("-", "_")


def register_species_config(config: SpeciesConfig) -> None:
    """Register a species configuration.

    Parameters
    ----------
    config : SpeciesConfig
        Configuration to register
    """
    species_name = _normalize_key(config.species_name)
    SPECIES_CONFIG_REGISTRY[species_name] = config

    for alias in config.all_names():
        SPECIES_ALIASES[_normalize_key(alias)] = species_name


def get_species_config(species: str) -> SpeciesConfig:
    """Get species configuration by name or alias.

    Parameters
    ----------
    species : str
        Species name, scientific name, taxonomy id or alias

    Returns
    -------
    SpeciesConfig
        Species configuration

    Raises
    ------
    ValueError
        If species is not registered
    """
    _ensure_builtins_loaded()

    key = _normalize_key(species)
    key = SPECIES_ALIASES.get(key, key)

    if key not in SPECIES_CONFIG_REGISTRY:
        available = sorted(SPECIES_CONFIG_REGISTRY.keys())
        raise ValueError(
            f"Unknown species: '{species}'. "
            f"Available: {available}"
        )

    return SPECIES_CONFIG_REGISTRY[key]


def normalize_species(species: str) -> str:
    """Return the canonical name for a species label."""
    return get_species_config(species).species_name


def list_available_species() -> List[str]:
    """List all available species names.

    Returns
    -------
    List[str]
        Registered species names (canonical)
    """
    _ensure_builtins_loaded()
    return sorted(SPECIES_CONFIG_REGISTRY.keys())


def list_species_aliases() -> Dict[str, str]:
    """List all species aliases.

    Returns
    -------
    Dict[str, str]
        Map of alias -> canonical name
    """
    _ensure_builtins_loaded()
    return dict(SPECIES_ALIASES)


def _ensure_builtins_loaded() -> None:
    """Ensure builtin configs are loaded."""
    global _BUILTINS_LOADED
    if _BUILTINS_LOADED:
        return

    _load_builtin_configs()
    _BUILTINS_LOADED = True


def _load_builtin_configs() -> None:
    """Load builtin species, then overrides from configs/species/*.yaml."""
    for config in BUILTIN_SPECIES:
        register_species_config(config)

    # Expected location: GeneList-Reconciler/configs/species/
    module_dir = Path(__file__).parent
    package_root = module_dir.parent.parent
    configs_dir = package_root / "configs" / "species"

    if not configs_dir.exists():
        return

    for yaml_path in sorted(configs_dir.glob("*.yaml")):
        if "template" in yaml_path.name.lower():
            continue

        try:
            config = SpeciesConfig.from_yaml(yaml_path)
        except (OSError, yaml.YAMLError, ValueError) as e:
            import warnings
            warnings.warn(f"Failed to load species config from {yaml_path}: {e}")
            continue
        if config.species_name:
            register_species_config(config)
