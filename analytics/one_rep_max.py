"""
One-Rep-Max Calculator
Estimated 1RM and volume for a single set

All formulas work in floating point and return full precision;
rounding is left to whoever displays the number.
"""

import numpy as np
from enum import Enum
from typing import Dict, Union


class OneRepMaxFormula(str, Enum):
    """Supported 1RM estimation formulas"""
    BRZYCKI = "BRZYCKI"
    EPLEY = "EPLEY"
    LOMBARDI = "LOMBARDI"
    MAYHEW = "MAYHEW"
    OCONNER = "OCONNER"
    WATHAN = "WATHAN"

    @property
    def display_name(self) -> str:
        return FORMULA_NAMES[self]

    @classmethod
    def resolve(cls, formula: Union['OneRepMaxFormula', str, None]) -> 'OneRepMaxFormula':
        """Look up a formula by member or name; unknown names fall back to Epley"""
        if isinstance(formula, cls):
            return formula
        if isinstance(formula, str):
            try:
                return cls(formula.strip().upper())
            except ValueError:
                pass
        return DEFAULT_FORMULA


FORMULA_NAMES = {
    OneRepMaxFormula.BRZYCKI: 'Brzycki',
    OneRepMaxFormula.EPLEY: 'Epley',
    OneRepMaxFormula.LOMBARDI: 'Lombardi',
    OneRepMaxFormula.MAYHEW: 'Mayhew et al.',
    OneRepMaxFormula.OCONNER: "O'Conner et al.",
    OneRepMaxFormula.WATHAN: 'Wathan',
}

DEFAULT_FORMULA = OneRepMaxFormula.EPLEY


def _brzycki(weight: float, reps: float) -> float:
    # The denominator reaches zero at 37 reps
    if reps >= 37:
        return weight * 2
    return weight * 36 / (37 - reps)


def _epley(weight: float, reps: float) -> float:
    return weight * (1 + 0.0333 * reps)


def _lombardi(weight: float, reps: float) -> float:
    return weight * reps ** 0.1


def _mayhew(weight: float, reps: float) -> float:
    return weight * 100 / (52.2 + 41.9 * float(np.exp(-0.055 * reps)))


def _oconner(weight: float, reps: float) -> float:
    return weight * (1 + 0.025 * reps)


def _wathan(weight: float, reps: float) -> float:
    return weight * 100 / (48.8 + 53.8 * float(np.exp(-0.075 * reps)))


FORMULAS = {
    OneRepMaxFormula.BRZYCKI: _brzycki,
    OneRepMaxFormula.EPLEY: _epley,
    OneRepMaxFormula.LOMBARDI: _lombardi,
    OneRepMaxFormula.MAYHEW: _mayhew,
    OneRepMaxFormula.OCONNER: _oconner,
    OneRepMaxFormula.WATHAN: _wathan,
}


def calculate_1rm(weight: float, reps: float,
                  formula: Union[OneRepMaxFormula, str] = DEFAULT_FORMULA) -> float:
    """
    Calculate estimated 1RM using one of the supported formulas.

    Args:
        weight: Weight lifted
        reps: Number of reps
        formula: Formula member or name ('EPLEY', 'brzycki', ...)

    Returns:
        Estimated 1RM, 0 for a set without weight or reps
    """
    if not weight or not reps or weight <= 0 or reps <= 0:
        return 0.0
    if reps == 1:
        return float(weight)

    return float(FORMULAS[OneRepMaxFormula.resolve(formula)](weight, reps))


def calculate_all_1rm(weight: float, reps: float) -> Dict[str, float]:
    """Estimated 1RM under every formula, keyed by formula name"""
    return {
        formula.value: calculate_1rm(weight, reps, formula)
        for formula in OneRepMaxFormula
    }


def calculate_volume(weight: float, reps: float) -> float:
    """Set volume (weight x reps); 0 when either is missing or not positive"""
    if not weight or not reps or weight <= 0 or reps <= 0:
        return 0.0
    return weight * reps
