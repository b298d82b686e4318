"""Hexagonal board model and road tile resolver."""

from .board import SpatialBoard
from .connectivity import ConnectivityResolver
from .issues import EditResult, Issue, IssueCode
from .side_indexer import AssetCatalog, AssetResolution
from .tile_classifier import classify

__version__ = "0.1.0"

__all__ = [
    "SpatialBoard",
    "ConnectivityResolver",
    "EditResult",
    "Issue",
    "IssueCode",
    "AssetCatalog",
    "AssetResolution",
    "classify",
]
