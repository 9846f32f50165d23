import orjson
import pytest

from amlich.ruleset import DATA_DIR, baseline_data


@pytest.fixture
def data():
    return baseline_data()


@pytest.fixture
def raw_almanac():
    """A fresh, mutable copy of the bundled rule set document."""
    return orjson.loads((DATA_DIR / "almanac.json").read_bytes())
