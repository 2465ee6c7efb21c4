import pytest

from nvs_partition_gen.partition import Partition


@pytest.fixture
def nvs():
    """Partition with room for two regular pages."""
    return Partition(2 * 4096)


@pytest.fixture
def csv_header():
    return "key,type,encoding,value\n"
