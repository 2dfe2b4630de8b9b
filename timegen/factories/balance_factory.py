from __future__ import annotations
from typing import Optional

from timegen.contracts.run_config import TimeGenConfig
from timegen.components.balancing.resampling import ClassBalancer
from timegen.components.interfaces import Resampler


def make_resampler(cfg: TimeGenConfig) -> Optional[Resampler]:
    """
    Create the resampling strategy from config; None when no balancing is requested.
    """
    if cfg.balance == "none":
        return None
    return ClassBalancer(policy=cfg.balance, replace=cfg.replace)
