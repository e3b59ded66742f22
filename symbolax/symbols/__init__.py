"""Concrete symbol families built on ``Linear``.

- ``delta``: differences of points ``(x_i - x_j)``.
- ``gamma``: Plücker coordinates (minors indexed by column sets).
- ``epsilon``: variables and complements ``1 - x_{i_1} ... x_{i_k}`` with ``LiParam`` symbols.
- ``theta``: differences and complements ``1 - ratio`` with ``LiraParam`` symbols.
- ``simple_vector``: plain integer words.
"""

from symbolax.symbols.x import X, XForm, Zero, Inf, Undefined, to_x
from symbolax.symbols.delta import (
    Delta,
    DeltaExpr,
    DeltaICoExpr,
    DeltaNCoExpr,
    DeltaHCoExpr,
    D,
)
from symbolax.symbols.gamma import (
    Gamma,
    GammaExpr,
    GammaICoExpr,
    GammaNCoExpr,
    GammaACoExpr,
    GammaHCoExpr,
    G,
)
from symbolax.symbols.ratio import CompoundRatio
from symbolax.symbols.formal_symbols import LiParam, LiraParam
from symbolax.symbols.epsilon import (
    EpsilonVar,
    EpsilonComplement,
    EpsilonExpr,
    EpsilonICoExpr,
    EVar,
    EComplementIndexList,
    EComplementRangeInclusive,
    EUnity,
    EFormalSymbolPositive,
    EFormalSymbolSigned,
)
from symbolax.symbols.theta import (
    ThetaComplement,
    ThetaExpr,
    ThetaICoExpr,
    TUnity,
    TRatio,
    TComplement,
    TFormalSymbol,
)
from symbolax.symbols.simple_vector import (
    SimpleVectorExpr,
    SimpleVectorICoExpr,
    SimpleVectorCoExpr,
    SimpleVectorACoExpr,
    SimpleVectorHCoExpr,
    SV,
    CoSV,
)

__all__ = [
    "X",
    "XForm",
    "Zero",
    "Inf",
    "Undefined",
    "to_x",
    "Delta",
    "DeltaExpr",
    "DeltaICoExpr",
    "DeltaNCoExpr",
    "DeltaHCoExpr",
    "D",
    "Gamma",
    "GammaExpr",
    "GammaICoExpr",
    "GammaNCoExpr",
    "GammaACoExpr",
    "GammaHCoExpr",
    "G",
    "CompoundRatio",
    "LiParam",
    "LiraParam",
    "EpsilonVar",
    "EpsilonComplement",
    "EpsilonExpr",
    "EpsilonICoExpr",
    "EVar",
    "EComplementIndexList",
    "EComplementRangeInclusive",
    "EUnity",
    "EFormalSymbolPositive",
    "EFormalSymbolSigned",
    "ThetaComplement",
    "ThetaExpr",
    "ThetaICoExpr",
    "TUnity",
    "TRatio",
    "TComplement",
    "TFormalSymbol",
    "SimpleVectorExpr",
    "SimpleVectorICoExpr",
    "SimpleVectorCoExpr",
    "SimpleVectorACoExpr",
    "SimpleVectorHCoExpr",
    "SV",
    "CoSV",
]
