# packages/catalog/filters.py

from dataclasses import dataclass
from typing import Container, Iterable, List

from packages.contracts.assets import Asset


@dataclass(frozen=True)
class FilterQuery:
    text: str = ""
    watchlist_only: bool = False


def matches_text(asset: Asset, text: str) -> bool:
    """Case-insensitive substring match on name or symbol. Empty text matches all."""
    needle = text.lower()
    return needle in asset.name.lower() or needle in asset.symbol.lower()


def filter_assets(
    catalog: Iterable[Asset], query: FilterQuery, watchlist: Container[str]
) -> List[Asset]:
    """
    Derives the visible subset of the catalog. Order is preserved;
    an empty result is a valid answer, not an error.
    """
    visible = []
    for asset in catalog:
        if not matches_text(asset, query.text):
            continue
        if query.watchlist_only and asset.id not in watchlist:
            continue
        visible.append(asset)
    return visible
