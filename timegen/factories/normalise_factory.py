from __future__ import annotations
from timegen.contracts.choices import NormaliseName
from timegen.components.interfaces import Normaliser
from timegen.components.normalisation.normalise import SampleNormaliser


def make_normaliser(mode: NormaliseName) -> Normaliser:
    """Create a normaliser strategy for ``mode``."""
    return SampleNormaliser(mode=mode)
