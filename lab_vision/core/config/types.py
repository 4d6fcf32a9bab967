"""
Semantic Type Definitions & Validation Primitives.

Centralized registry of Annotated types used by the configuration schemas.
Field-level constraints reject unstable values (non-positive widths, learning
rates outside (0, 1), zero standard deviations) at the edge of the
application, before any tensor is allocated.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
from typing import Annotated, Literal, Tuple, Union

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
from pydantic import Field

# =========================================================================== #
#                                1. GENERIC PRIMITIVES                        #
# =========================================================================== #

PositiveInt = Annotated[int, Field(gt=0)]

# =========================================================================== #
#                                2. MODEL GEOMETRY                            #
# =========================================================================== #

Channels = Annotated[int, Field(ge=1, le=3)]
LayerWidth = Annotated[int, Field(ge=1, le=4096)]
SpatialSize = Annotated[Tuple[PositiveInt, PositiveInt], Field(description="(height, width)")]
ArchitectureTag = Annotated[str, Field(min_length=1)]

# =========================================================================== #
#                                3. OPTIMIZATION                              #
# =========================================================================== #

LearningRate = Annotated[float, Field(gt=1e-8, lt=1.0)]
BatchSize = Annotated[int, Field(ge=1, le=4096)]

# =========================================================================== #
#                                4. NORMALIZATION                             #
# =========================================================================== #

# A single statistic (single-channel) or one value per RGB channel
NormValue = Union[float, Tuple[float, float, float]]

# =========================================================================== #
#                                5. SYSTEM & METADATA                         #
# =========================================================================== #

DatasetSlug = Annotated[str, Field(pattern=r"^[a-z0-9_-]+$", min_length=1, max_length=50)]
Split = Literal["train", "test"]
DeviceName = Literal["auto", "cpu", "cuda", "mps"]
