"""Run the linkage stages in order: build, reconcile, match, emit."""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional
from wilayah.core.emitter import FactSink, write_facts
from wilayah.core.geomatcher import MatchStats, match_geonames
from wilayah.core.place_index import PlaceTree
from wilayah.core.reconciler import ReconcileStats, reconcile
from wilayah.core.tree_builder import build_tree
from wilayah.gazetteers.base import GazetteerProvider
from wilayah.utils.logging import log_structured
from wilayah.utils.timing import Timer, time_function


@dataclass
class PipelineResult:
    """What a complete run produced."""
    tree: PlaceTree
    reconcile_stats: ReconcileStats
    match_stats: MatchStats
    fact_count: int


@time_function
def run_pipeline(
    primary: GazetteerProvider,
    stats_source: GazetteerProvider,
    geonames: GazetteerProvider,
    sink: FactSink,
    thresholds: Optional[Dict[int, float]] = None,
    progress: Optional[Callable[[Iterable], Iterable]] = None
) -> PipelineResult:
    """
    Build the place tree and hand its facts to `sink`.
    
    Each stage needs the indices left complete by the one before, so the
    stages run strictly in sequence. A failing source or sink aborts the run
    with a PipelineError naming the stage; the sink may then hold a partial
    fact set that the caller must discard.
    
    Args:
        primary: Permendagri register rows
        stats_source: BPS code and coordinate table
        geonames: GeoNames dump
        sink: Receives (subject, predicate, object) facts
        thresholds: Match radius per level (configured defaults when None)
        progress: Optional wrapper around the GeoNames record stream (e.g. tqdm)
        
    Returns:
        PipelineResult with the tree and stage counters
    """
    with Timer("build", primary.get_name()) as timer:
        tree = build_tree(primary.iter_records())
        timer.record(places=len(tree))
    
    with Timer("reconcile", stats_source.get_name()) as timer:
        reconcile_stats = reconcile(tree, stats_source.iter_records())
        timer.record(rows=reconcile_stats.rows, moved=reconcile_stats.moved,
                     coordinates=reconcile_stats.coordinates_propagated)
    
    with Timer("match", geonames.get_name()) as timer:
        records = geonames.iter_records()
        if progress is not None:
            records = progress(records)
        match_stats = match_geonames(tree, records, thresholds)
        timer.record(records=match_stats.records, accepted=match_stats.accepted)
    
    with Timer("emit") as timer:
        fact_count = write_facts(tree, sink)
        timer.record(facts=fact_count)
    
    log_structured("info", "Pipeline finished", places=len(tree), facts=fact_count)
    return PipelineResult(tree, reconcile_stats, match_stats, fact_count)
