"""
Project-wide Path Constants.

Single source of truth for the filesystem layout: project root discovery,
the raw dataset directory, and the locations of the configuration files and
embedded checkpoint assets shipped inside the package.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import os
from pathlib import Path
from typing import Final

# =========================================================================== #
#                                GLOBAL CONSTANTS                             #
# =========================================================================== #

# Global logger identity shared by every module
LOGGER_NAME: Final[str] = "lab_vision"

# =========================================================================== #
#                                PATH CALCULATIONS                            #
# =========================================================================== #


def get_project_root() -> Path:
    """
    Locates the project root by searching upwards for anchor files.

    Falls back to the current working directory when the package is installed
    outside a source checkout (no markers found above the package).
    """
    current_path = Path(__file__).resolve().parent
    root_markers = {".git", "pyproject.toml"}

    for parent in [current_path] + list(current_path.parents):
        if any((parent / marker).exists() for marker in root_markers):
            return parent

    return Path.cwd()


PROJECT_ROOT: Final[Path] = get_project_root().resolve()

# Package directory (lab_vision/)
PACKAGE_ROOT: Final[Path] = Path(__file__).resolve().parents[2]

# Per-dataset JSON configuration files, shipped as package data
CONFIGS_DIR: Final[Path] = PACKAGE_ROOT / "configs"

# Embedded checkpoint blobs consumed by the inference services
ASSETS_DIR: Final[Path] = PACKAGE_ROOT / "assets"

# Raw dataset files; LAB_VISION_DATASET_DIR overrides the default location
DATASET_DIR: Final[Path] = Path(
    os.getenv("LAB_VISION_DATASET_DIR", str(PROJECT_ROOT / "datasets"))
).resolve()
