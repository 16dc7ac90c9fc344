"""Unit tests for the command-line interface."""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from genelist_reconciler import __version__
from genelist_reconciler.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def hits_file(tmp_path):
    path = tmp_path / "hits.txt"
    path.write_text("\n".join([f"GENE{i}" for i in range(1, 9)] + ["NOTAGENE"]) + "\n")
    return path


def _reconcile_args(reference_files, hits_path, out_dir, *extra):
    return [
        "reconcile",
        "--hits", str(hits_path),
        "--sct-data", str(reference_files["ctd"]),
        "--orthologs", str(reference_files["orthologs"]),
        "--catalogs", str(reference_files["catalogs"]),
        "--out", str(out_dir),
        *extra,
    ]


class TestReconcileCommand:
    """Tests for the reconcile command."""

    def test_cross_species_run(self, runner, reference_files, hits_file, tmp_output_dir):
        args = _reconcile_args(
            reference_files, hits_file, tmp_output_dir,
            "--genelist-species", "human", "--sct-species", "mouse",
        )
        result = runner.invoke(cli, args)

        assert result.exit_code == 0, result.output
        assert "Reconciled 8 hits against 7 background genes (human)" in result.output
        assert (tmp_output_dir / "hits.txt").read_text().split() == [f"GENE{i}" for i in range(1, 9)]
        assert (tmp_output_dir / "background.txt").read_text().split() == [f"GENE{i}" for i in range(9, 16)]

        summary = json.loads((tmp_output_dir / "summary.json").read_text())
        assert summary["sct_species"] == "mouse"
        assert summary["provenance"]["projection"] == "map_orthologs"

        run = yaml.safe_load((tmp_output_dir / "run.yaml").read_text().split("---")[0])
        assert run["config"]["min_hits"] == 4
        assert list(tmp_output_dir.glob("reconcile_*.log"))

    def test_too_few_hits(self, runner, reference_files, tmp_path, tmp_output_dir):
        hits = tmp_path / "short.txt"
        hits.write_text("GENE1\nGENE2\nGENE3\n")
        args = _reconcile_args(
            reference_files, hits, tmp_output_dir,
            "--genelist-species", "human", "--sct-species", "mouse",
        )
        result = runner.invoke(cli, args)

        assert result.exit_code == 1
        assert "E201_TOO_FEW_HITS" in result.output
        errors = yaml.safe_load((tmp_output_dir / "errors.yaml").read_text().split("---")[0])
        assert errors["error_type"] == "InsufficientDataError"
        assert not (tmp_output_dir / "hits.txt").exists()

    def test_gene_size_control_needs_human(self, runner, reference_files, hits_file, tmp_output_dir):
        args = _reconcile_args(
            reference_files, hits_file, tmp_output_dir,
            "--genelist-species", "mouse", "--sct-species", "mouse", "--gene-size-control",
        )
        result = runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "E101_GENE_SIZE_CONTROL_SPECIES" in result.output

    def test_standardise_with_synonyms(self, runner, reference_files, tmp_path, tmp_output_dir):
        hits = tmp_path / "aliases.txt"
        hits.write_text("alias1\nALIAS2\nGENE3\ngene4\n")
        args = _reconcile_args(
            reference_files, hits, tmp_output_dir,
            "--synonyms", str(reference_files["synonyms"]),
            "--genelist-species", "human", "--sct-species", "mouse", "--standardise",
        )
        result = runner.invoke(cli, args)

        assert result.exit_code == 0, result.output
        assert (tmp_output_dir / "hits.txt").read_text().split() == ["GENE1", "GENE2", "GENE3", "GENE4"]
        assert "Reconciled 4 hits against 11 background genes" in result.output

    def test_user_background(self, runner, reference_files, hits_file, tmp_path, tmp_output_dir):
        bg = tmp_path / "bg.txt"
        bg.write_text("\n".join(f"GENE{i}" for i in range(1, 13)) + "\n")
        args = _reconcile_args(
            reference_files, hits_file, tmp_output_dir,
            "--bg", str(bg), "--genelist-species", "human", "--sct-species", "mouse",
        )
        result = runner.invoke(cli, args)

        assert result.exit_code == 0, result.output
        assert (tmp_output_dir / "background.txt").read_text().split() == ["GENE9", "GENE10", "GENE11", "GENE12"]

    def test_config_file(self, runner, reference_files, hits_file, tmp_path, tmp_output_dir):
        config = tmp_path / "reconcile.yaml"
        config.write_text("reconciliation:\n  min_hits: 10\n")
        args = _reconcile_args(
            reference_files, hits_file, tmp_output_dir,
            "--config", str(config), "--genelist-species", "human", "--sct-species", "mouse",
        )
        result = runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "At least 10 genes" in result.output


class TestMiscCommands:
    """Tests for version and species commands."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_species(self, runner):
        result = runner.invoke(cli, ["species"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        human = next(line for line in lines if line.startswith("human:"))
        assert "hsapiens" in human
        assert any(line.startswith("mouse:") for line in lines)


def _file_handlers():
    logger = logging.getLogger("genelist_reconciler")
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


class TestRunLogLifecycle:
    """Tests that each reconcile run releases its log file."""

    def test_handler_closed_after_success(self, runner, reference_files, hits_file, tmp_output_dir):
        args = _reconcile_args(
            reference_files, hits_file, tmp_output_dir,
            "--genelist-species", "human", "--sct-species", "mouse",
        )
        result = runner.invoke(cli, args)
        assert result.exit_code == 0, result.output
        assert _file_handlers() == []

    def test_handler_closed_after_failure(self, runner, reference_files, tmp_path, tmp_output_dir):
        hits = tmp_path / "short.txt"
        hits.write_text("GENE1\n")
        args = _reconcile_args(
            reference_files, hits, tmp_output_dir,
            "--genelist-species", "human", "--sct-species", "mouse",
        )
        result = runner.invoke(cli, args)
        assert result.exit_code == 1
        assert _file_handlers() == []

    def test_later_messages_not_in_previous_log(self, runner, reference_files, hits_file, tmp_output_dir):
        args = _reconcile_args(
            reference_files, hits_file, tmp_output_dir,
            "--genelist-species", "human", "--sct-species", "mouse",
        )
        runner.invoke(cli, args)
        logging.getLogger("genelist_reconciler").warning("after the run")
        log_file = next(tmp_output_dir.glob("reconcile_*.log"))
        assert "after the run" not in log_file.read_text()


class TestOutputSpeciesOption:
    """Tests for the --output-species default."""

    def test_defaults_to_human(self):
        option = next(p for p in cli.commands["reconcile"].params if p.name == "output_species")
        assert option.default == "human"

    def test_config_file_cannot_set_output_species(self, runner, reference_files, hits_file, tmp_path, tmp_output_dir):
        config = tmp_path / "reconcile.yaml"
        config.write_text("reconciliation:\n  output_species: mouse\n")
        args = _reconcile_args(
            reference_files, hits_file, tmp_output_dir,
            "--config", str(config), "--genelist-species", "human", "--sct-species", "mouse",
        )
        result = runner.invoke(cli, args)
        assert result.exit_code == 2
        assert "Unsupported reconciliation setting" in result.output
        assert not (tmp_output_dir / "hits.txt").exists()
