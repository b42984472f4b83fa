import pytest

from normalize.region import normalize_region


@pytest.mark.parametrize("raw", ["East US", "eastus", " EASTUS ", "East\tUs\n"])
def test_region_variants_normalize_identically(raw):
    assert normalize_region(raw) == "eastus"


def test_normalize_is_idempotent():
    once = normalize_region("West Europe")
    assert normalize_region(once) == once == "westeurope"


def test_empty_region():
    assert normalize_region(None) == ""
    assert normalize_region("   ") == ""
