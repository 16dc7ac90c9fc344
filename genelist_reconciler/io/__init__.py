"""I/O utilities for GeneList-Reconciler.

Provides run logging and table loaders for gene lists, reference tables
and reference datasets.
"""

from .logging import (
    get_logger,
    get_timestamped_log_path,
    log_json,
    log_yaml,
    remove_file_handlers,
)
from .tables import (
    ensure_output_dir,
    load_gene_list,
    load_ortholog_table,
    load_reference_dataset,
    load_species_catalogs,
    load_synonym_table,
    write_reconciliation_result,
)

__all__ = [
    # Logging
    "get_logger",
    "get_timestamped_log_path",
    "log_json",
    "log_yaml",
    "remove_file_handlers",
    # Tables
    "ensure_output_dir",
    "load_gene_list",
    "load_ortholog_table",
    "load_reference_dataset",
    "load_species_catalogs",
    "load_synonym_table",
    "write_reconciliation_result",
]
