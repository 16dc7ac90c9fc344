"""Pytest configuration and shared fixtures for GeneList-Reconciler tests."""

import sys
from pathlib import Path

import pytest
import pandas as pd

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Import mock data generators
from tests.fixtures import (
    IdentityOrthologMapper,
    StaticBackgroundBuilder,
    create_mock_ctd,
    create_ortholog_table,
    create_species_catalogs,
    create_synonym_table,
)


# ============================================================================
# Reference Table Fixtures
# ============================================================================


@pytest.fixture
def ortholog_table() -> pd.DataFrame:
    """Human/mouse ortholog groups (20 one-to-one, DUPA one-to-many)."""
    return create_ortholog_table()


@pytest.fixture
def species_catalogs() -> dict:
    """Human and mouse gene catalogs."""
    return create_species_catalogs()


@pytest.fixture
def synonym_table() -> pd.DataFrame:
    """Human and mouse alias -> canonical name table."""
    return create_synonym_table()


@pytest.fixture
def table_mapper(ortholog_table):
    """Ortholog mapper backed by the mock ortholog table."""
    from genelist_reconciler.core.orthology import TableOrthologMapper

    return TableOrthologMapper({"homologene": ortholog_table})


@pytest.fixture
def catalog_builder(table_mapper, species_catalogs):
    """Background builder backed by the mock catalogs."""
    from genelist_reconciler.core.orthology import CatalogBackgroundBuilder

    return CatalogBackgroundBuilder(table_mapper, species_catalogs)


# ============================================================================
# Reference Dataset Fixtures
# ============================================================================


@pytest.fixture
def human_ctd():
    """Human reference dataset over GENE1..GENE15 plus DUPA."""
    genes = [f"GENE{i}" for i in range(1, 16)] + ["DUPA"]
    return create_mock_ctd(genes, species="human")


@pytest.fixture
def mouse_ctd():
    """Mouse reference dataset over Gene1..Gene15, Dupa1 and MouseOnly."""
    genes = [f"Gene{i}" for i in range(1, 16)] + ["Dupa1", "MouseOnly"]
    return create_mock_ctd(genes, species="mouse")


@pytest.fixture
def letters_ctd():
    """Reference dataset over A..H plus Z."""
    return create_mock_ctd(list("ABCDEFGH") + ["Z"])


# ============================================================================
# Collaborator Fixtures
# ============================================================================


@pytest.fixture
def identity_mapper() -> IdentityOrthologMapper:
    return IdentityOrthologMapper()


@pytest.fixture
def letters_background() -> StaticBackgroundBuilder:
    """Background A..H (Z deliberately absent)."""
    return StaticBackgroundBuilder(list("ABCDEFGH"))


# ============================================================================
# File Fixtures
# ============================================================================


@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Create a temporary output directory for tests."""
    output_dir = tmp_path / "output"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


@pytest.fixture
def reference_files(tmp_path, ortholog_table, species_catalogs, synonym_table, mouse_ctd) -> dict:
    """Write reference tables and a mouse reference dataset to disk."""
    ortholog_path = tmp_path / "homologene.tsv"
    ortholog_table.to_csv(ortholog_path, sep="\t", index=False)

    catalog_rows = [
        {"species": species, "gene": gene}
        for species, genes in species_catalogs.items()
        for gene in genes
    ]
    catalog_path = tmp_path / "catalogs.tsv"
    pd.DataFrame(catalog_rows).to_csv(catalog_path, sep="\t", index=False)

    synonym_path = tmp_path / "synonyms.csv"
    synonym_table.to_csv(synonym_path, index=False)

    ctd_dir = tmp_path / "ctd"
    ctd_dir.mkdir()
    for i, level in enumerate(mouse_ctd, start=1):
        level.mean_exp.to_csv(ctd_dir / f"level{i}_mean_exp.csv")
        level.specificity.to_csv(ctd_dir / f"level{i}_specificity.csv")

    return {
        "orthologs": ortholog_path,
        "catalogs": catalog_path,
        "synonyms": synonym_path,
        "ctd": ctd_dir,
    }
