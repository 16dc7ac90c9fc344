"""Recording collaborator mocks.

Each mock records its calls in ``calls`` so tests can assert which
collaborators a reconciliation touched.
"""

from typing import Iterable, List, Optional

import pandas as pd

from genelist_reconciler.core.models import ReferenceDataset
from genelist_reconciler.core.orthology.base import (
    BackgroundBuilder,
    DatasetStandardizer,
    GeneStandardizer,
    OrthologMapper,
)


class IdentityOrthologMapper(OrthologMapper):
    """Maps every gene to itself, whatever the species."""

    def __init__(self):
        self.calls: List[tuple] = []

    def map_orthologs(self, genes, input_species, output_species, method="homologene"):
        genes = list(genes)
        self.calls.append((tuple(genes), input_species, output_species, method))
        return pd.DataFrame({"input": genes, "ortholog_gene": genes})


class StaticBackgroundBuilder(BackgroundBuilder):
    """Returns a fixed background (or the user background when given)."""

    def __init__(self, background: Iterable[str]):
        self.background = list(background)
        self.calls: List[tuple] = []

    def build(self, species1, species2, output_species, bg=None):
        self.calls.append((species1, species2, output_species, bg))
        return list(bg) if bg is not None else list(self.background)


class RecordingGeneStandardizer(GeneStandardizer):
    """Upper-cases symbols; symbols starting with "NA" fail to map."""

    def __init__(self):
        self.calls: List[tuple] = []

    def standardize(self, genes, species, drop_na=True):
        genes = list(genes)
        self.calls.append((tuple(genes), species, drop_na))
        names = [None if g.upper().startswith("NA") else g.upper() for g in genes]
        result = pd.DataFrame({"input": genes, "name": names})
        if drop_na:
            result = result[result["name"].notna()].reset_index(drop=True)
        return result


class RecordingDatasetStandardizer(DatasetStandardizer):
    """Returns a copy of the dataset re-tagged with the output species."""

    def __init__(self):
        self.calls: List[tuple] = []

    def standardize(self, dataset: ReferenceDataset, input_species, output_species):
        self.calls.append((input_species, output_species))
        converted = dataset.copy()
        converted.species = output_species
        return converted
