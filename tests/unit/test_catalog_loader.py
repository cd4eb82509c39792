"""Asset Catalog Loader Unit Tests"""

import pytest

from packages.catalog.loader import AssetCatalogLoader
from packages.market_lib.errors import DataUnavailable
from tests.conftest import FakeMarketSource, make_market


class TestAssetCatalogLoader:
    """Test catalog fetch and mapping"""

    @pytest.mark.asyncio
    async def test_maps_rows_to_assets_in_order(self, three_markets) -> None:
        """Upstream order (market cap desc) is kept"""
        loader = AssetCatalogLoader(FakeMarketSource(markets=three_markets))

        assets = await loader.load()

        assert [a.id for a in assets] == ["bitcoin", "ethereum", "solana"]
        assert assets[0].current_price == 42_000.0
        assert assets[0].market_cap_rank == 1
        assert assets[0].market_cap_billions == 42_000.0

    @pytest.mark.asyncio
    async def test_optional_fields_may_be_absent(self) -> None:
        """Missing 24h high/low and change do not reject the row"""
        row = make_market("newcoin", "New Coin", "new")
        for key in ("high_24h", "low_24h", "price_change_percentage_24h", "image"):
            row.pop(key)
        loader = AssetCatalogLoader(FakeMarketSource(markets=[row]))

        (asset,) = await loader.load()

        assert asset.high_24h is None
        assert asset.low_24h is None
        assert asset.price_change_percentage_24h is None

    @pytest.mark.asyncio
    async def test_skips_malformed_rows(self, three_markets) -> None:
        """A row without a price is dropped, the rest survive"""
        broken = make_market("broken", "Broken", "brk")
        broken.pop("current_price")
        loader = AssetCatalogLoader(FakeMarketSource(markets=three_markets + [broken]))

        assets = await loader.load()

        assert [a.id for a in assets] == ["bitcoin", "ethereum", "solana"]

    @pytest.mark.asyncio
    async def test_source_failure_is_unavailable(self) -> None:
        """Transport errors become DataUnavailable"""
        loader = AssetCatalogLoader(
            FakeMarketSource(markets_error=OSError("network unreachable"))
        )

        with pytest.raises(DataUnavailable) as exc_info:
            await loader.load()

        assert exc_info.value.source == "catalog"

    @pytest.mark.asyncio
    async def test_non_list_payload_is_unavailable(self) -> None:
        """An error object instead of an array is a failure"""
        source = FakeMarketSource()
        source.markets = {"status": {"error_code": 429}}
        loader = AssetCatalogLoader(source)

        with pytest.raises(DataUnavailable):
            await loader.load()
