# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""
Surface array creator configuration.

Attributes of :class:`CreatorConfig`:
    anchor: Binning value passed to ``Surface.binning_position`` when sorting
        surfaces into bins and measuring completion distances.
    completion_check: 'count' skips completion when the number of bins equals
        the number of surfaces; 'filled' skips it only when no bin is empty.
    complete: Run the completion pass at all.
    register_neighbours: Run the neighbour registration pass.
"""

from __future__ import annotations
from dataclasses import dataclass

from .binning import BinningValue
from .completion import COMPLETION_CHECKS

DEFAULT_ANCHOR = BinningValue.R
DEFAULT_COMPLETION_CHECK = 'count'


@dataclass(frozen=True)
class CreatorConfig:
    """Options for :class:`~surfacearray.creator.SurfaceArrayCreator`."""
    anchor: BinningValue = DEFAULT_ANCHOR
    completion_check: str = DEFAULT_COMPLETION_CHECK
    complete: bool = True
    register_neighbours: bool = True

    def __post_init__(self):
        try:
            object.__setattr__(self, 'anchor', BinningValue(self.anchor))
        except ValueError:
            raise ValueError(f"Unknown anchor binning value: {self.anchor!r}") from None
        if self.completion_check not in COMPLETION_CHECKS:
            raise ValueError(
                f"completion_check must be one of {COMPLETION_CHECKS}, "
                f"got {self.completion_check!r}"
            )
