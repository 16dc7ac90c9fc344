"""Configuration for gene list reconciliation."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass
class ReconciliationConfig:
    """Configuration for gene list reconciliation.

    Attributes:
        min_hits: Minimum hit genes that must survive filtering.
        ortholog_method: Method name passed to the ortholog mapper.
        default_species: Species assumed when a label is not provided.
        non121_strategy: Handling of non one-to-one orthologs when
            converting the reference dataset and building backgrounds.
        recompute_specificity: Recompute specificity after converting the
            reference dataset.
    """

    min_hits: int = 4
    ortholog_method: str = "homologene"
    default_species: str = "mouse"
    non121_strategy: str = "drop_both_species"
    recompute_specificity: bool = True

    @classmethod
    def from_yaml(cls, path: Path) -> "ReconciliationConfig":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Handle nested reconciliation section
        if "reconciliation" in data:
            data = data["reconciliation"] or {}

        return cls(**data)

    @classmethod
    def default(cls) -> "ReconciliationConfig":
        """Create default configuration."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "min_hits": self.min_hits,
            "ortholog_method": self.ortholog_method,
            "default_species": self.default_species,
            "non121_strategy": self.non121_strategy,
            "recompute_specificity": self.recompute_specificity,
        }
