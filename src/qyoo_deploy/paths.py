"""Path management utilities for qyoo-deploy."""

from pathlib import Path
from typing import Optional, Union


def get_default_artifacts_dir() -> Path:
    """
    Get default Hardhat artifacts directory.

    Returns:
        Path to ./artifacts
    """
    return Path.cwd() / "artifacts"


def get_artifacts_dir(artifacts_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Resolve the artifacts directory.

    Args:
        artifacts_root: Custom artifacts directory (defaults to ./artifacts)

    Returns:
        Absolute path to the artifacts directory
    """
    if artifacts_root is None:
        return get_default_artifacts_dir()
    return Path(artifacts_root).absolute()


def get_debug_path(artifact_path: Path) -> Path:
    """
    Get the debug file Hardhat writes next to an artifact.

    Args:
        artifact_path: Path to <Name>.json

    Returns:
        Path to <Name>.dbg.json
    """
    return artifact_path.with_name(f"{artifact_path.stem}.dbg.json")
