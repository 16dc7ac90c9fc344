"""Command-line interface for GeneList-Reconciler.

Provides CLI commands for reconciling gene lists and inspecting species.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from genelist_reconciler import __version__


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for CLI commands."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    # Run log files capture INFO; the console honours -v/--debug
    for handler in logging.getLogger().handlers:
        handler.setLevel(level)
    return logging.getLogger("genelist_reconciler")


@click.group()
@click.version_option(version=__version__, prog_name="genelist-reconciler")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """GeneList-Reconciler: prepare gene lists for cell-type enrichment tests.

    Reconciles a hit gene list, an optional background and a reference
    cell-type dataset into one species namespace.

    Examples:

        # Human gene list against a mouse reference dataset
        genelist-reconciler reconcile --hits hits.txt --sct-data ctd/ \\
            --orthologs homologene.tsv --catalogs catalogs.tsv \\
            --genelist-species human --sct-species mouse --out checked/

        # List supported species
        genelist-reconciler species
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["logger"] = setup_logging(verbose, debug)


@cli.command()
@click.option("--hits", "hits_path", required=True, type=click.Path(exists=True),
              help="Hit gene list (one symbol per line, or CSV/TSV)")
@click.option("--sct-data", "sct_data_path", required=True, type=click.Path(exists=True, file_okay=False),
              help="Reference dataset directory with level*_mean_exp.csv tables")
@click.option("--orthologs", "orthologs_path", required=True, type=click.Path(exists=True),
              help="Ortholog group table (one column per species)")
@click.option("--synonyms", "synonyms_path", type=click.Path(exists=True),
              help="Synonym table (species, alias, name); needed for --standardise")
@click.option("--catalogs", "catalogs_path", type=click.Path(exists=True),
              help="Per-species gene catalogs (species, gene); needed without --bg")
@click.option("--bg", "bg_path", type=click.Path(exists=True),
              help="Background gene list")
@click.option("--genelist-species", help="Species of the hit gene list")
@click.option("--sct-species", help="Species of the reference dataset")
@click.option("--output-species", default="human", show_default=True,
              help="Species namespace for all outputs")
@click.option("--gene-size-control", is_flag=True,
              help="Keep hits and background genes absent from the reference dataset")
@click.option("--standardise", is_flag=True,
              help="Standardise same-species hits via the synonym table")
@click.option("--config", "-c", type=click.Path(exists=True),
              help="Reconciliation configuration file (YAML)")
@click.option("--out", "-o", "output_path", required=True, type=click.Path(),
              help="Output directory")
@click.pass_context
def reconcile(
    ctx: click.Context,
    hits_path: str,
    sct_data_path: str,
    orthologs_path: str,
    synonyms_path: Optional[str],
    catalogs_path: Optional[str],
    bg_path: Optional[str],
    genelist_species: Optional[str],
    sct_species: Optional[str],
    output_species: str,
    gene_size_control: bool,
    standardise: bool,
    config: Optional[str],
    output_path: str,
) -> None:
    """Reconcile hits, background and reference dataset genes.

    Writes hits.txt, background.txt, sct_genes.txt and summary.json to the
    output directory. Exits with status 1 when the inputs cannot be
    reconciled (e.g. fewer than four usable hits).
    """
    logger = ctx.obj["logger"]

    # Import here to avoid slow startup
    from genelist_reconciler.core.orthology import (
        CatalogBackgroundBuilder,
        TableGeneStandardizer,
        TableOrthologMapper,
    )
    from genelist_reconciler.core.reconciliation import (
        GeneListReconciler,
        ReconciliationConfig,
        ReconciliationError,
        ReconciliationRequest,
    )
    from genelist_reconciler.io import (
        get_logger,
        load_gene_list,
        load_ortholog_table,
        load_reference_dataset,
        load_species_catalogs,
        load_synonym_table,
        log_yaml,
        remove_file_handlers,
        write_reconciliation_result,
    )

    try:
        cfg = ReconciliationConfig.from_yaml(Path(config)) if config else ReconciliationConfig()
    except TypeError as e:
        raise click.BadParameter(f"Unsupported reconciliation setting: {e}", param_hint="--config") from e
    out_dir = Path(output_path)
    run_logger, log_file = get_logger(
        "genelist_reconciler",
        out_dir / "reconcile.log",
        level=logging.DEBUG if ctx.obj["debug"] else logging.INFO,
    )
    logger.info(f"Logging to: {log_file}")

    try:
        hits = load_gene_list(hits_path)
        bg = load_gene_list(bg_path) if bg_path else None
        sct_data = load_reference_dataset(sct_data_path, species=sct_species)
        logger.info(f"Loaded {len(hits)} hits" + (f", {len(bg)} background genes" if bg else ""))

        mapper = TableOrthologMapper({cfg.ortholog_method: load_ortholog_table(orthologs_path)}, logger=logger)
        catalogs = load_species_catalogs(catalogs_path) if catalogs_path else {}
        builder = CatalogBackgroundBuilder(
            mapper,
            catalogs,
            method=cfg.ortholog_method,
            non121_strategy=cfg.non121_strategy,
            logger=logger,
        )
        gene_standardizer = (
            TableGeneStandardizer(load_synonym_table(synonyms_path), logger=logger)
            if synonyms_path
            else None
        )

        reconciler = GeneListReconciler(
            ortholog_mapper=mapper,
            background_builder=builder,
            gene_standardizer=gene_standardizer,
            config=cfg,
            logger=logger,
        )
        request = ReconciliationRequest(
            sct_data=sct_data,
            hits=hits,
            bg=bg,
            genelist_species=genelist_species,
            sct_species=sct_species,
            output_species=output_species,
            gene_size_control=gene_size_control,
            standardise=standardise,
        )

        try:
            result = reconciler.reconcile(request)
        except ReconciliationError as e:
            log_yaml(out_dir / "errors.yaml", e.to_dict())
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        paths = write_reconciliation_result(result, out_dir)
        log_yaml(out_dir / "run.yaml", {"config": cfg.to_dict(), **result.summary()})
    finally:
        remove_file_handlers(run_logger)

    click.echo(
        f"Reconciled {len(result.hits)} hits against {len(result.bg)} background genes "
        f"({result.output_species})"
    )
    click.echo(f"Output saved to: {paths['summary'].parent}")


@cli.command()
def species() -> None:
    """List supported species and their aliases."""
    from genelist_reconciler.config import list_available_species, list_species_aliases

    aliases = list_species_aliases()
    for name in list_available_species():
        names = sorted(a for a, canonical in aliases.items() if canonical == name and a != name)
        click.echo(f"{name}: {', '.join(names)}")


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
