"""
Exception types raised by Text Compression KNN.
"""


class CompressionKNNError(Exception):
  """Base class for all errors raised by this package."""


class EmptyTrainingSetError(CompressionKNNError, ValueError):
  """Raised when a prediction is requested against zero training examples."""


class DegenerateInputError(CompressionKNNError, ValueError):
  """
  Raised when both inputs of a similarity computation compress to zero bytes.

  The normalized compression distance divides by ``max(C(x), C(y))``, which
  is undefined in that case.
  """


class EncodingError(CompressionKNNError, UnicodeError):
  """Raised when text cannot be converted to bytes before compression."""
