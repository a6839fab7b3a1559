"""
panchangam.engines.factory
--------------------------
Transforms pure data specifications into live, executable engine objects.
"""

from __future__ import annotations

from ..core.types import EngineSpec
from .calendar import PanchangamEngine
from .classical import ClassicalModel, ClassicalParams
from .drik import DrikModel, DrikParams
from .interfaces import PositionModel


def build_model(spec: EngineSpec) -> PositionModel:
    """Select the position-model strategy named by the spec."""
    if isinstance(spec.model_params, DrikParams):
        return DrikModel(spec.model_params)
    if isinstance(spec.model_params, ClassicalParams):
        return ClassicalModel(spec.model_params)
    raise TypeError(f"Unknown model params type: {type(spec.model_params)}")


def make_engine(spec: EngineSpec) -> PanchangamEngine:
    """The universal entry point."""
    return PanchangamEngine(
        id=spec.id,
        model=build_model(spec),
        solver=spec.solver,
        search=spec.search,
    )
