import numpy as np


class DomainError(ValueError):
  """Raised when a real-valued operation is evaluated outside its domain."""


# IEEE semantics: log(0) = -inf, 0 ** -1 = inf, log(-1) = nan
_IEEE = dict(divide='ignore', invalid='ignore', over='ignore')


def evaluate_power(base: float, exponent: float) -> float:
  if base < 0 and np.isfinite(exponent) and not float(exponent).is_integer():
    raise DomainError(f"negative base {base} raised to non-integral exponent {exponent}")
  with np.errstate(**_IEEE):
    return float(np.power(np.float64(base), np.float64(exponent)))


def evaluate_log(operand: float) -> float:
  with np.errstate(**_IEEE):
    return float(np.log(np.float64(operand)))


def evaluate_tanh(operand: float) -> float:
  return float(np.tanh(np.float64(operand)))


def evaluate_absolute(operand: float) -> float:
  if operand >= 0:
    return operand
  return -1.0 * operand
