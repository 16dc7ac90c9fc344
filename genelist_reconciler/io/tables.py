"""Table I/O for gene lists, reference tables and reference datasets.

Delimiters are chosen from the file suffix (``.tsv``/``.txt`` tab, otherwise
comma). Column validation raises ``ValueError`` naming the missing columns.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from ..core.models import CellTypeLevel, ReconciliationResult, ReferenceDataset
from ..core.orthology.genes import SYNONYM_COLUMNS

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

GENE_COLUMN_CANDIDATES = ["gene", "genes", "symbol", "gene_symbol", "hgnc_symbol", "mgi_symbol"]
CATALOG_COLUMNS = ["species", "gene"]

_LEVEL_PATTERN = re.compile(r"^level(\d+)_mean_exp\.(csv|tsv)$")

# Gene symbols such as "NA" or "NULL" are real names; only blank cells are missing
_NA_OPTIONS = {"keep_default_na": False, "na_values": [""]}


def ensure_output_dir(path: PathLike) -> Path:
    """Create the directory at path if it does not exist and return it."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _separator(path: Path) -> str:
    return "\t" if path.suffix.lower() in (".tsv", ".txt", ".tab") else ","


def _require_file(path: PathLike, label: str) -> Path:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"{label} not found: {path}")
    return path


def _require_columns(df: pd.DataFrame, required: List[str], label: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"{label} missing columns: {missing}")


def load_gene_list(path: PathLike) -> List[str]:
    """Load a gene list.

    Plain files hold one symbol per line; blank lines and ``#`` comments are
    skipped. CSV/TSV files use a gene-like column when present, otherwise the
    first column.

    Parameters
    ----------
    path : PathLike
        Gene list file.

    Returns
    -------
    List[str]
        Gene symbols in file order (duplicates kept).
    """
    path = _require_file(path, "Gene list")

    if path.suffix.lower() in (".csv", ".tsv"):
        df = pd.read_csv(path, sep=_separator(path), dtype=str, **_NA_OPTIONS)
        lower = {str(c).lower(): c for c in df.columns}
        column = next((lower[c] for c in GENE_COLUMN_CANDIDATES if c in lower), df.columns[0])
        genes = df[column].dropna().str.strip()
        return [g for g in genes if g]

    genes = []
    with path.open(encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if line and not line.startswith("#"):
                genes.append(line)
    return genes


def load_ortholog_table(path: PathLike) -> pd.DataFrame:
    """Load an ortholog group table (one column per species)."""
    path = _require_file(path, "Ortholog table")
    df = pd.read_csv(path, sep=_separator(path), dtype=str, **_NA_OPTIONS)
    if df.shape[1] < 2:
        raise ValueError(f"Ortholog table {path} needs at least two species columns")
    logger.info("Loaded %d ortholog groups from %s", len(df), path)
    return df


def load_synonym_table(path: PathLike) -> pd.DataFrame:
    """Load a synonym table with ``species``, ``alias`` and ``name`` columns."""
    path = _require_file(path, "Synonym table")
    df = pd.read_csv(path, sep=_separator(path), dtype=str, **_NA_OPTIONS)
    _require_columns(df, SYNONYM_COLUMNS, f"Synonym table {path}")
    return df


def load_species_catalogs(path: PathLike) -> Dict[str, List[str]]:
    """Load per-species gene catalogs from a long ``species``/``gene`` table."""
    path = _require_file(path, "Species catalog table")
    df = pd.read_csv(path, sep=_separator(path), dtype=str, **_NA_OPTIONS)
    _require_columns(df, CATALOG_COLUMNS, f"Species catalog table {path}")
    df = df.dropna(subset=CATALOG_COLUMNS)
    catalogs = {
        str(species): group["gene"].tolist()
        for species, group in df.groupby("species", sort=False)
    }
    logger.info(
        "Loaded gene catalogs: %s",
        ", ".join(f"{s}={len(g)}" for s, g in catalogs.items()),
    )
    return catalogs


def load_reference_dataset(directory: PathLike, species: Optional[str] = None) -> ReferenceDataset:
    """Load a reference cell-type dataset from a directory of level tables.

    Expects ``level{N}_mean_exp.csv`` files (genes as the first column, cell
    types as the remaining columns) and optional matching
    ``level{N}_specificity.csv`` files. Levels are ordered by N.

    Parameters
    ----------
    directory : PathLike
        Directory holding the level tables.
    species : str, optional
        Species whose symbols index the rows.

    Returns
    -------
    ReferenceDataset
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Reference dataset directory not found: {directory}")

    found = []
    for path in directory.iterdir():
        match = _LEVEL_PATTERN.match(path.name)
        if match:
            found.append((int(match.group(1)), path))
    if not found:
        raise ValueError(f"No level*_mean_exp.csv tables in {directory}")

    levels = []
    for number, mean_path in sorted(found):
        mean_exp = pd.read_csv(mean_path, sep=_separator(mean_path), index_col=0, **_NA_OPTIONS)
        mean_exp.index = mean_exp.index.astype(str)
        spec_path = mean_path.with_name(mean_path.name.replace("_mean_exp", "_specificity"))
        specificity = None
        if spec_path.exists():
            specificity = pd.read_csv(spec_path, sep=_separator(spec_path), index_col=0, **_NA_OPTIONS)
            specificity.index = specificity.index.astype(str)
        levels.append(CellTypeLevel(mean_exp=mean_exp, specificity=specificity, name=f"level{number}"))

    logger.info(
        "Loaded reference dataset with %d levels (%d genes in level 1)",
        len(levels),
        len(levels[0].mean_exp),
    )
    return ReferenceDataset(levels=levels, species=species)


def write_reconciliation_result(result: ReconciliationResult, output_dir: PathLike) -> Dict[str, Path]:
    """Write reconciled gene lists and a JSON summary.

    Parameters
    ----------
    result : ReconciliationResult
        Reconciliation output.
    output_dir : PathLike
        Destination directory (created if missing).

    Returns
    -------
    Dict[str, Path]
        Written file paths keyed by ``hits``, ``bg``, ``sct_genes``, ``summary``.
    """
    out_dir = ensure_output_dir(output_dir)
    paths = {
        "hits": out_dir / "hits.txt",
        "bg": out_dir / "background.txt",
        "sct_genes": out_dir / "sct_genes.txt",
        "summary": out_dir / "summary.json",
    }
    for key in ("hits", "bg", "sct_genes"):
        genes = getattr(result, key)
        paths[key].write_text("".join(f"{g}\n" for g in genes), encoding="utf-8")

    summary = {**result.summary(), "provenance": result.provenance}
    with paths["summary"].open("w", encoding="utf-8") as handle:
        json.dump(summary, handle, indent=2, default=str)

    logger.info("Wrote reconciled gene lists to %s", out_dir)
    return paths
