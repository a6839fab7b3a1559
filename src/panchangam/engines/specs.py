from __future__ import annotations

from typing import Dict

from ..core.types import EngineSpec, SearchParams
from .classical import ClassicalParams
from .drik import DrikParams
from .solver import SolverParams


# ============================================================
# DRIK (ephemeris-style, Lahiri ayanamsa)
# ============================================================

DRIK = EngineSpec(
    id="drik",
    kind="ephemeris",
    model_params=DrikParams(),
    solver=SolverParams(),
    search=SearchParams(),
    description="Meeus/ELP2000 series with Lahiri ayanamsa (default)",
)

# ============================================================
# SURYA SIDDHANTA (classical mean motion)
# ============================================================

SURYA_SIDDHANTA = EngineSpec(
    id="surya_siddhanta",
    kind="classical",
    model_params=ClassicalParams(),
    # mean-motion speeds make Newton steps coarser near the apsides
    solver=SolverParams(max_iter=80),
    search=SearchParams(),
    description="Surya Siddhanta mean motions with manda corrections, linear ayanamsa",
)

ALL_SPECS: Dict[str, EngineSpec] = {
    DRIK.id: DRIK,
    SURYA_SIDDHANTA.id: SURYA_SIDDHANTA,
}
