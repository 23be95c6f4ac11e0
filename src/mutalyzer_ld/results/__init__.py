"""Normalization of remote results.

The Mutalyzer SOAP service wraps every answer, and every complex field
of an answer, in an extra single-entry layer. This package removes that
layer and raises on fatal messages embedded in the result.
"""

from .models import NORMALIZED_RESULT, ErrorMessage, SingletonWrapper
from .normalizer import ResultNormalizer, normalize

__all__ = ["ResultNormalizer", "normalize", "SingletonWrapper", "ErrorMessage", "NORMALIZED_RESULT"]
