"""
Pytest configuration file for the holiday markets project.
This file sets up the Python path so tests can import modules from the project root,
and provides the sample sheet and record factories the service tests share.
"""
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from domain.models import MarketRecord  # noqa: E402


SAMPLE_CSV = """Name,Latitude,Longitude,Region,Zip,Address,Date,Cost,Website,Description
Christkindlmarket,39.7474,-104.9903,Denver Metro,80202,"1445 Larimer St, Denver, CO 80202","Nov. 21-Dec. 23",Free,https://christkindlmarketdenver.com,"German-style market with ""glühwein"" and crafts"
Olde Town Holiday Market,39.8028,-105.0811,, 80003 ,"Olde Town, Arvada, CO 80003",Dec. 13-14,,,
,39.7,-104.9,Denver Metro,80202,"Nowhere, Denver, CO 80202",Dec. 6,Free,,
Bad Coords Market,abc,-105.0,Front Range,80501,"Main St, Longmont, CO 80501",Dec. 6,Free,,
Short Row,39.5
Christkindlmarket,40.0150,-105.2705,Boulder County,80302,"Pearl St, Boulder, CO 80302",TBD,$5,,Second location
"""


@pytest.fixture
def sample_csv():
    """Sheet export with two good rows, three unusable rows and a duplicate name."""
    return SAMPLE_CSV


@pytest.fixture
def saturday_now():
    """Saturday 13 Dec 2025, mid-morning."""
    return datetime(2025, 12, 13, 10, 30)


@pytest.fixture
def make_record():
    """Factory for MarketRecords with sensible defaults."""
    counter = {"n": 0}

    def _make(name, market_id=None, city="Denver", region="Denver Metro",
              address="", description="", raw_date_text="", dates=(),
              latitude=39.74, longitude=-104.99):
        counter["n"] += 1
        return MarketRecord(
            market_id=market_id or f"m{counter['n']}",
            name=name,
            latitude=latitude,
            longitude=longitude,
            region=region,
            city=city,
            address=address,
            raw_date_text=raw_date_text,
            description=description,
            dates=tuple(dates),
        )

    return _make
