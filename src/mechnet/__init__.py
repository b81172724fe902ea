"""mechnet: layered layout and intervention pathway analysis for causal networks."""

from mechnet.config import DEFAULT_MAX_DEPTH, LayoutConfig, load_layout_config
from mechnet.errors import ConfigError, DatasetError, MechnetError
from mechnet.graph import (
    AdjacencyIndex,
    Boundary,
    DrugLibraryEntry,
    DrugTarget,
    Edge,
    FeedbackLoop,
    GraphModel,
    Node,
    State,
    Stock,
    build_adjacency_index,
)
from mechnet.layout import LayoutPosition, LayoutResult, PseudoNode, compute_layout, layout_visible
from mechnet.pathway import (
    LoopInvolvement,
    PathwayConfig,
    PathwayResult,
    PathwayStats,
    analyze_loop_involvement,
    calculate_all_drug_pathways,
    calculate_drug_pathway,
    compute_pathway,
    get_pathway_stats,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "AdjacencyIndex",
    "Boundary",
    "ConfigError",
    "DatasetError",
    "DrugLibraryEntry",
    "DrugTarget",
    "Edge",
    "FeedbackLoop",
    "GraphModel",
    "LayoutConfig",
    "LayoutPosition",
    "LayoutResult",
    "LoopInvolvement",
    "MechnetError",
    "Node",
    "PathwayConfig",
    "PathwayResult",
    "PathwayStats",
    "PseudoNode",
    "State",
    "Stock",
    "analyze_loop_involvement",
    "build_adjacency_index",
    "calculate_all_drug_pathways",
    "calculate_drug_pathway",
    "compute_layout",
    "compute_pathway",
    "get_pathway_stats",
    "layout_visible",
    "load_layout_config",
]
