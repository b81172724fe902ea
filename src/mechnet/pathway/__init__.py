"""Pathway analysis: bounded traversal, loop involvement, summary statistics."""

from mechnet.pathway.loops import (
    Involvement,
    LoopInvolvement,
    analyze_loop_involvement,
    classify_involvement,
)
from mechnet.pathway.stats import (
    PathwayConfig,
    PathwayStats,
    calculate_all_drug_pathways,
    calculate_drug_pathway,
    calculate_pathway_config,
    get_pathway_stats,
)
from mechnet.pathway.traversal import PathwayResult, compute_pathway

__all__ = [
    "Involvement",
    "LoopInvolvement",
    "PathwayConfig",
    "PathwayResult",
    "PathwayStats",
    "analyze_loop_involvement",
    "calculate_all_drug_pathways",
    "calculate_drug_pathway",
    "calculate_pathway_config",
    "classify_involvement",
    "compute_pathway",
    "get_pathway_stats",
]
