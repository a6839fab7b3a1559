from __future__ import annotations

import logging
from typing import Mapping, Optional

from panchangam.core.engine import EngineRegistry
from panchangam.core.types import EngineSpec
from panchangam.engines.factory import make_engine
from panchangam.engines.specs import ALL_SPECS

log = logging.getLogger(__name__)

def build_registry(specs: Optional[Mapping[str, EngineSpec]] = None) -> EngineRegistry:
    """One engine per spec, keyed by the spec's registry name."""
    specs = ALL_SPECS if specs is None else specs
    engines = {name: make_engine(spec) for name, spec in specs.items()}
    log.debug("Registered panchangam engines: %s", sorted(engines))
    return EngineRegistry(engines)
