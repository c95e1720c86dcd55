from pathlib import Path


def get_resource_path(relative_path: str) -> Path:
    """
    Get absolute path to a bundled resource.

    Args:
        relative_path: Path relative to the weekplanner package (e.g., "resources/templates")

    Returns:
        Absolute Path object
    """
    # This file is weekplanner/utils.py, so the package root is its parent
    base_path = Path(__file__).parent.absolute()
    return base_path / relative_path
