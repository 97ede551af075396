from __future__ import annotations
from tithicalc.engines.interfaces import OracleRegistry
from tithicalc.engines.oracle import ReferenceOracle

def _load_de422():
    from tithicalc.ephemeris.de422 import DE422Oracle
    return DE422Oracle.load()

def build_registry() -> OracleRegistry:
    # de422 stays a factory until first requested (optional extras)
    return OracleRegistry({
        "reference": ReferenceOracle(),
        "de422": _load_de422,
    })
