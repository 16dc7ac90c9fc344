"""Reconciliation engine for hit, background and reference gene lists.

The engine runs a fixed sequence of steps. Each step takes the state left by
the previous one and returns a new state, so every membership check sits next
to the step that establishes it. Step order is part of the contract: moving a
filter changes which genes survive.

    1. resolve_species       normalize labels, gene size control guard
    2. build_background      user background or catalog intersection
    3. standardize_dataset   convert reference dataset when species differ
    4. project_hits          standardize or ortholog-map the hit list
    5. restrict_hits         hits -> background
    6. restrict_sct_genes    reference genes -> background
    7. check_min_hits        enough hits left to test
    8. restrict_to_dataset   hits, background -> reference genes
    9. remove_hits_from_bg   background := background - hits
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ...config.species import normalize_species
from ..errors import ConfigurationError, InsufficientDataError, InvariantViolation
from ..models import ReconciliationRequest, ReconciliationResult, ReferenceDataset
from ..orthology.background import CatalogBackgroundBuilder, unique_genes
from ..orthology.base import (
    BackgroundBuilder,
    DatasetStandardizer,
    GeneStandardizer,
    OrthologMapper,
    SpeciesResolver,
)
from ..orthology.dataset import OrthologDatasetStandardizer
from ..orthology.species import RegistrySpeciesResolver
from .config import ReconciliationConfig

GENE_SIZE_CONTROL_SPECIES = "human"


@dataclass(frozen=True)
class ReconciliationState:
    """Intermediate values threaded through the reconciliation steps."""

    request: ReconciliationRequest
    genelist_species: Optional[str] = None
    sct_species: Optional[str] = None
    output_species: Optional[str] = None
    bg: Tuple[str, ...] = ()
    sct_data: Optional[ReferenceDataset] = None
    sct_genes: Tuple[str, ...] = ()
    hits: Tuple[str, ...] = ()
    provenance: Dict[str, Any] = field(default_factory=dict)

    def record(self, **changes: Any) -> "ReconciliationState":
        """Return a copy with ``changes`` applied and provenance merged."""
        provenance = changes.pop("provenance", {})
        return replace(self, provenance={**self.provenance, **provenance}, **changes)


Step = Callable[[ReconciliationState], ReconciliationState]


class GeneListReconciler:
    """Engine for reconciling gene lists before enrichment testing.

    Orchestrates species resolution, background construction, reference
    dataset conversion and hit projection, then filters the three gene sets
    into a consistent universe. Collaborators are injected; the engine never
    maps genes itself.

    Example:
        >>> reconciler = GeneListReconciler(
        ...     ortholog_mapper=mapper,
        ...     background_builder=builder,
        ... )
        >>> result = reconciler.reconcile(ReconciliationRequest(
        ...     sct_data=ctd,
        ...     hits=genes,
        ...     genelist_species="human",
        ...     sct_species="mouse",
        ... ))
        >>> print(f"{len(result.hits)} hits vs {len(result.bg)} background genes")
    """

    def __init__(
        self,
        ortholog_mapper: OrthologMapper,
        background_builder: Optional[BackgroundBuilder] = None,
        species_resolver: Optional[SpeciesResolver] = None,
        dataset_standardizer: Optional[DatasetStandardizer] = None,
        gene_standardizer: Optional[GeneStandardizer] = None,
        config: Optional[ReconciliationConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize reconciliation engine.

        Args:
            ortholog_mapper: Cross-species symbol mapper (also used for
                same-species hits unless ``standardise`` is requested).
            background_builder: Background builder. Defaults to a catalog
                builder without catalogs, which only accepts user backgrounds.
            species_resolver: Species label resolver (registry by default).
            dataset_standardizer: Reference dataset converter (ortholog
                based by default).
            gene_standardizer: Same-species symbol canonicalizer; required
                only for ``standardise=True`` requests.
            config: Reconciliation configuration (uses defaults if None).
            logger: Logger instance.
        """
        self.config = config or ReconciliationConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.ortholog_mapper = ortholog_mapper
        self.background_builder = background_builder or CatalogBackgroundBuilder(
            ortholog_mapper,
            catalogs={},
            method=self.config.ortholog_method,
            non121_strategy=self.config.non121_strategy,
            logger=self.logger,
        )
        self.species_resolver = species_resolver or RegistrySpeciesResolver(
            default_species=self.config.default_species,
            logger=self.logger,
        )
        self.dataset_standardizer = dataset_standardizer or OrthologDatasetStandardizer(
            ortholog_mapper,
            method=self.config.ortholog_method,
            non121_strategy=self.config.non121_strategy,
            recompute_specificity=self.config.recompute_specificity,
            logger=self.logger,
        )
        self.gene_standardizer = gene_standardizer

    @property
    def steps(self) -> List[Tuple[str, Step]]:
        return [
            ("resolve_species", self._resolve_species),
            ("build_background", self._build_background),
            ("standardize_dataset", self._standardize_dataset),
            ("project_hits", self._project_hits),
            ("restrict_hits", self._restrict_hits),
            ("restrict_sct_genes", self._restrict_sct_genes),
            ("check_min_hits", self._check_min_hits),
            ("restrict_to_dataset", self._restrict_to_dataset),
            ("remove_hits_from_bg", self._remove_hits_from_bg),
        ]

    def reconcile(self, request: ReconciliationRequest) -> ReconciliationResult:
        """Run every step in order and return the reconciled gene lists.

        Args:
            request: Reconciliation inputs. Never modified.

        Returns:
            ReconciliationResult with disjoint hits and background.

        Raises:
            ConfigurationError: Inconsistent request or unknown species/method.
            InsufficientDataError: Fewer than ``min_hits`` hits survive.
            InvariantViolation: A post-filter membership check failed.
        """
        self.logger.info("Checking gene list inputs.")
        state = ReconciliationState(request=request)
        for name, step in self.steps:
            self.logger.debug("Step %s", name)
            state = step(state)

        self.logger.info(
            "Reconciled %d hits against %d background genes (%d reference genes)",
            len(state.hits),
            len(state.bg),
            len(state.sct_genes),
        )
        return ReconciliationResult(
            hits=list(state.hits),
            sct_genes=list(state.sct_genes),
            sct_data=state.sct_data,
            bg=list(state.bg),
            genelist_species=state.genelist_species,
            sct_species=state.sct_species,
            output_species=state.output_species,
            provenance=dict(state.provenance),
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _resolve_species(self, state: ReconciliationState) -> ReconciliationState:
        request = state.request
        species = self.species_resolver.resolve(request.genelist_species, request.sct_species)

        if request.gene_size_control and species.genelist_species != GENE_SIZE_CONTROL_SPECIES:
            raise ConfigurationError(
                "geneSizeControl assumes the genesets are from human genetics, "
                "so genelist_species must be set to 'human'",
                error_code="E101_GENE_SIZE_CONTROL_SPECIES",
                expected=GENE_SIZE_CONTROL_SPECIES,
                found=species.genelist_species,
                suggestion="Set gene_size_control=False or provide a human gene list.",
            )

        try:
            output_species = normalize_species(request.output_species)
        except ValueError as e:
            raise ConfigurationError(
                f"Unrecognized output_species: '{request.output_species}'",
                error_code="E102_UNKNOWN_SPECIES",
                found=request.output_species,
                suggestion=str(e),
            ) from e

        return state.record(
            genelist_species=species.genelist_species,
            sct_species=species.sct_species,
            output_species=output_species,
        )

    def _build_background(self, state: ReconciliationState) -> ReconciliationState:
        user_bg = list(state.request.bg) if state.request.bg is not None else None
        bg = self.background_builder.build(
            state.sct_species,
            state.genelist_species,
            state.output_species,
            bg=user_bg,
        )
        return state.record(bg=tuple(bg), provenance={"n_bg_initial": len(bg)})

    def _standardize_dataset(self, state: ReconciliationState) -> ReconciliationState:
        self.logger.info("Standardising sct_data.")
        sct_data = state.request.sct_data
        if state.sct_species != state.output_species:
            sct_data = self.dataset_standardizer.standardize(
                sct_data,
                input_species=state.sct_species,
                output_species=state.output_species,
            )
        sct_genes = sct_data.gene_universe()
        return state.record(
            sct_data=sct_data,
            sct_genes=tuple(sct_genes),
            provenance={"n_sct_genes_initial": len(sct_genes)},
        )

    def _project_hits(self, state: ReconciliationState) -> ReconciliationState:
        self.logger.info(
            "Converting gene list input to standardised %s genes.",
            state.output_species,
        )
        hits = unique_genes(state.request.hits)

        if state.genelist_species == state.output_species and state.request.standardise:
            if self.gene_standardizer is None:
                raise ConfigurationError(
                    "standardise=True requires a gene standardizer",
                    error_code="E104_MISSING_COLLABORATOR",
                    suggestion="Pass gene_standardizer= (e.g. a TableGeneStandardizer).",
                )
            mapping = self.gene_standardizer.standardize(
                hits,
                species=state.genelist_species,
                drop_na=True,
            )
            projected = [str(g) for g in mapping["name"]]
            projection = "standardize_genes"
        else:
            mapping = self.ortholog_mapper.map_orthologs(
                hits,
                input_species=state.genelist_species,
                output_species=state.output_species,
                method=self.config.ortholog_method,
            )
            projected = [str(g) for g in mapping["ortholog_gene"]]
            projection = "map_orthologs"

        return state.record(
            hits=tuple(projected),
            provenance={
                "n_hits_input": len(hits),
                "n_hits_projected": len(projected),
                "projection": projection,
            },
        )

    def _restrict_hits(self, state: ReconciliationState) -> ReconciliationState:
        bg = set(state.bg)
        hits = tuple(h for h in state.hits if h in bg)
        # Unreachable after the filter above; guards against step reordering
        self._check_subset(hits, bg, "hits")
        return state.record(hits=hits, provenance={"n_hits_in_bg": len(hits)})

    def _restrict_sct_genes(self, state: ReconciliationState) -> ReconciliationState:
        bg = set(state.bg)
        sct_genes = tuple(g for g in state.sct_genes if g in bg)
        # Unreachable after the filter above; guards against step reordering
        self._check_subset(sct_genes, bg, "sct_genes")
        return state.record(sct_genes=sct_genes, provenance={"n_sct_genes_in_bg": len(sct_genes)})

    def _check_min_hits(self, state: ReconciliationState) -> ReconciliationState:
        if len(state.hits) < self.config.min_hits:
            raise InsufficientDataError(
                f"At least {self.config.min_hits} genes which are present in the "
                "single cell dataset & background gene set are required to test "
                "for enrichment.",
                expected=f">= {self.config.min_hits} hits",
                found=len(state.hits),
                context={
                    "genelist_species": state.genelist_species,
                    "sct_species": state.sct_species,
                    "output_species": state.output_species,
                },
            )
        return state

    def _restrict_to_dataset(self, state: ReconciliationState) -> ReconciliationState:
        if state.request.gene_size_control:
            self.logger.debug("gene_size_control: keeping genes absent from sct_data")
            return state
        sct_genes = set(state.sct_genes)
        hits = tuple(h for h in state.hits if h in sct_genes)
        bg = tuple(g for g in state.bg if g in sct_genes)
        return state.record(
            hits=hits,
            bg=bg,
            provenance={"n_hits_in_sct": len(hits), "n_bg_in_sct": len(bg)},
        )

    def _remove_hits_from_bg(self, state: ReconciliationState) -> ReconciliationState:
        hits = set(state.hits)
        bg = tuple(g for g in state.bg if g not in hits)
        return state.record(
            bg=bg,
            provenance={"n_hits_final": len(state.hits), "n_bg_final": len(bg)},
        )

    @staticmethod
    def _check_subset(genes: Sequence[str], universe: set, label: str) -> None:
        outside = [g for g in genes if g not in universe]
        if outside:
            raise InvariantViolation(
                f"All {label} must be in bg.",
                expected=f"{label} subset of bg",
                found=f"{len(outside)} genes outside bg (e.g. {outside[:5]})",
            )


def check_genelist_inputs(
    sct_data: ReferenceDataset,
    hits: Sequence[Any],
    bg: Optional[Sequence[Any]] = None,
    genelist_species: Optional[str] = None,
    sct_species: Optional[str] = None,
    output_species: str = "human",
    gene_size_control: bool = False,
    standardise: bool = False,
    *,
    ortholog_mapper: OrthologMapper,
    background_builder: Optional[BackgroundBuilder] = None,
    species_resolver: Optional[SpeciesResolver] = None,
    dataset_standardizer: Optional[DatasetStandardizer] = None,
    gene_standardizer: Optional[GeneStandardizer] = None,
    config: Optional[ReconciliationConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> ReconciliationResult:
    """Check hits and background gene lists before an enrichment test.

    Convenience wrapper building a :class:`GeneListReconciler` and a
    :class:`ReconciliationRequest` in one call.

    Args:
        sct_data: Reference cell-type dataset.
        hits: Candidate gene list.
        bg: Optional background gene list.
        genelist_species: Species of ``hits``.
        sct_species: Species of ``sct_data``.
        output_species: Namespace of the returned symbols.
        gene_size_control: Keep genes absent from ``sct_data``.
        standardise: Canonicalize same-species hits.
        ortholog_mapper: Cross-species symbol mapper.
        background_builder: Background builder.
        species_resolver: Species label resolver.
        dataset_standardizer: Reference dataset converter.
        gene_standardizer: Same-species symbol canonicalizer.
        config: Reconciliation configuration.
        logger: Logger instance.

    Returns:
        ReconciliationResult.
    """
    reconciler = GeneListReconciler(
        ortholog_mapper=ortholog_mapper,
        background_builder=background_builder,
        species_resolver=species_resolver,
        dataset_standardizer=dataset_standardizer,
        gene_standardizer=gene_standardizer,
        config=config,
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
    return reconciler.reconcile(request)
