"""Tests for the Plotly market map figure and click-event parsing."""
import pytest

from domain.season import SeasonConfig
from services.catalog_service import MarketCatalog
from ui.map_view import create_market_map, selected_market_id


@pytest.fixture
def season():
    return SeasonConfig(sheet_id="abc", center_lat=39.0, center_lon=-105.5, zoom=6, selected_zoom=11)


@pytest.fixture
def catalog(make_record, saturday_now):
    c = MarketCatalog(now=saturday_now)
    c.load([
        make_record("Aspen Faire", market_id="aspen", latitude=39.19, longitude=-106.82),
        make_record("Denver Lights", market_id="denver", latitude=39.74, longitude=-104.99),
    ])
    return c


class TestCreateMarketMap:
    def test_default_view(self, catalog, season):
        fig = create_market_map(catalog.view_frame(), season)
        assert len(fig.data) == 1
        assert [row[0] for row in fig.data[0].customdata] == ["aspen", "denver"]
        assert fig.layout.map.center.lat == 39.0
        assert fig.layout.map.zoom == 6

    def test_selected_market_centered_and_highlighted(self, catalog, season):
        market = catalog.select("denver")
        fig = create_market_map(catalog.view_frame(), season, market)
        assert len(fig.data) == 2
        assert [row[0] for row in fig.data[1].customdata] == ["denver"]
        assert fig.layout.map.center.lat == pytest.approx(39.74)
        assert fig.layout.map.zoom == 11

    def test_selected_market_filtered_out_still_centers(self, catalog, season):
        market = catalog.select("denver")
        catalog.set_search("aspen")
        fig = create_market_map(catalog.view_frame(), season, market)
        assert len(fig.data) == 1
        assert fig.layout.map.center.lon == pytest.approx(-104.99)

    def test_empty_view(self, catalog, season):
        catalog.set_search("nothing")
        fig = create_market_map(catalog.view_frame(), season)
        assert len(fig.data) == 0


class TestSelectedMarketId:
    def test_reads_first_point_customdata(self):
        event = {"selection": {"points": [{"customdata": ["aspen", "Dec. 6", "Aspen"]}]}}
        assert selected_market_id(event) == "aspen"

    @pytest.mark.parametrize("event", [
        None,
        {},
        {"selection": {"points": []}},
        {"selection": {"points": [{"lat": 39.0}]}},
    ])
    def test_no_selection(self, event):
        assert selected_market_id(event) is None
