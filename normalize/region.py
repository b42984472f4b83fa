from typing import Optional


def normalize_region(region: Optional[str]) -> str:
    """Canonical map key for an Azure region: case-folded, all whitespace removed.

    "East US", "eastus" and " EASTUS " all map to "eastus".
    """
    if not region:
        return ""
    return "".join(region.split()).casefold()
