"""
Utility functions for Text Compression KNN.
"""

import logging
from collections import Counter
from typing import Any, Hashable, Sequence

import numpy as np

from .compressors import Compressor
from .errors import EncodingError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = 'utf-8'


def encode_text(text: str, encoding: str = DEFAULT_ENCODING) -> bytes:
  """
  Convert text to the bytes that get compressed.

  Parameters
  ----------
  text : str
      Text to encode
  encoding : str
      Codec name, strict error handling

  Returns
  -------
  bytes
      Encoded text

  Raises
  ------
  EncodingError
      If the text cannot be represented in ``encoding``.
  """
  try:
    return text.encode(encoding)
  except UnicodeEncodeError as e:
    raise EncodingError(f"Cannot encode text as {encoding}: {e}") from e


def compressed_length(
    text: str,
    compressor: Compressor,
    encoding: str = DEFAULT_ENCODING
) -> int:
  """
  Number of bytes ``compressor`` produces for ``text``.

  Parameters
  ----------
  text : str
      Text to measure
  compressor : Compressor
      Object with a ``compress(bytes) -> bytes`` method
  encoding : str
      Text encoding applied before compression

  Returns
  -------
  int
      Compressed size in bytes
  """
  data = encode_text(text, encoding)
  size = len(compressor.compress(data))
  logger.debug(f"Compressed {len(data)} bytes to {size} bytes")
  return size


def compute_k(n_examples: int, k_fraction: float) -> int:
  """
  Number of neighbours to consult for a training set of ``n_examples``.

  ``round(n_examples * k_fraction)`` clamped to ``[1, n_examples]``. Small
  training sets would otherwise round down to zero neighbours.

  Parameters
  ----------
  n_examples : int
      Training set size, must be positive
  k_fraction : float
      Fraction of the training set to use as neighbours, must be positive

  Returns
  -------
  int
      Neighbour count
  """
  if n_examples < 1:
    raise ValueError(f"n_examples must be positive, got {n_examples}")
  if k_fraction <= 0:
    raise ValueError(f"k_fraction must be positive, got {k_fraction}")

  k = round(n_examples * k_fraction)
  if k < 1:
    logger.debug(f"k rounded to {k} for {n_examples} examples, clamping to 1")
    k = 1
  return min(k, n_examples)


def rank_by_score(labels: Sequence[Any], scores: Sequence[float]) -> list[tuple[Any, float]]:
  """
  Pair labels with scores and sort by score, highest first.

  The sort is stable, so equal scores keep their original order.

  Parameters
  ----------
  labels : sequence
      One label per score
  scores : sequence of float
      Similarity scores

  Returns
  -------
  list[tuple[Any, float]]
      ``(label, score)`` pairs in descending score order
  """
  if len(labels) != len(scores):
    raise ValueError("labels and scores must have the same length")

  scores_array = np.asarray(scores, dtype=float)
  order = np.argsort(-scores_array, kind='stable')
  return [(labels[i], float(scores_array[i])) for i in order]


def vote(ranking: Sequence[tuple[Hashable, float]], k: int) -> Hashable:
  """
  Majority label among the first ``k`` ranking entries.

  When several labels share the highest count, the one whose first member
  sits highest in the ranking wins.
  """
  if k < 1 or not ranking:
    raise ValueError("Cannot vote with no neighbours")

  neighbours = [label for label, _ in ranking[:k]]
  # Counter keeps first-seen order and most_common() is stable over it
  label_counts = Counter(neighbours)
  predicted_label = label_counts.most_common(1)[0][0]
  logger.debug(f"Voting result: {dict(label_counts)}")
  return predicted_label


def validate_training_set(texts: Sequence[Any], labels: Sequence[Any]) -> None:
  """
  Check that texts and labels can be used as a training set.

  Raises
  ------
  ValueError
      If lengths differ or the set is empty.
  TypeError
      If any text is not a string.
  """
  if len(texts) != len(labels):
    raise ValueError("X and y must have the same length")

  if len(texts) == 0:
    raise ValueError("Training data cannot be empty")

  for i, text in enumerate(texts):
    if not isinstance(text, str):
      raise TypeError(f"Training text at index {i} must be str, "
                      f"got {type(text).__name__}")
    if not text:
      logger.warning(f"Training text at index {i} is empty, its compressed "
                     f"size is mostly framing overhead")


def get_training_set_info(texts: Sequence[str], labels: Sequence[Any]) -> dict[str, Any]:
  """
  Get summary information about a training set.

  Parameters
  ----------
  texts : sequence of str
      Training texts
  labels : sequence
      Training labels

  Returns
  -------
  dict
      Dictionary with training set information
  """
  lengths = np.array([len(text) for text in texts], dtype=int)

  return {
    'n_examples': len(texts),
    'classes': list(dict.fromkeys(labels)),
    'class_counts': dict(Counter(labels)),
    'min_length': int(lengths.min()) if len(lengths) else 0,
    'max_length': int(lengths.max()) if len(lengths) else 0,
    'mean_length': float(lengths.mean()) if len(lengths) else 0.0,
  }
