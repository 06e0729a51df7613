"""
Similarity strategies for comparing two texts.

Every strategy is a callable ``(text1, text2) -> float`` where higher means
more alike. The classifier is given one explicitly.
"""

import logging
from typing import Optional, Protocol

from .compressors import Compressor, get_compressor
from .errors import DegenerateInputError
from .utils import DEFAULT_ENCODING, compressed_length

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = ' '


class SimilarityFn(Protocol):

  def __call__(self, text1: str, text2: str) -> float:
    ...


def _ncd_similarity(c1: int, c2: int, c12: int) -> float:
  max_size = max(c1, c2)
  if max_size == 0:
    raise DegenerateInputError("Both texts compressed to 0 bytes")
  return 1 - (c12 - min(c1, c2)) / max_size


def similarity(
    text1: str,
    text2: str,
    compress: Optional[Compressor] = None,
    encoding: str = DEFAULT_ENCODING,
    separator: str = DEFAULT_SEPARATOR
) -> float:
  """
  Compression similarity between two texts.

  similarity(x, y) = 1 - (C(x y) - min(C(x), C(y))) / max(C(x), C(y))

  where ``C`` is the compressed length of the encoded text and ``x y`` is
  the two texts joined by ``separator``. The result is not clamped; framing
  overhead can push it slightly outside [0, 1], and for empty or very short
  texts the score mostly reflects the compressor's header.

  Parameters
  ----------
  text1, text2 : str
      Texts to compare
  compress : Compressor, optional
      Defaults to gzip
  encoding : str, default='utf-8'
      Text encoding applied before compression
  separator : str, default=' '
      Inserted between the texts for the joint measurement

  Returns
  -------
  float
      Similarity score (1 = identical, lower = more different)

  Raises
  ------
  DegenerateInputError
      If both texts compress to zero bytes.
  EncodingError
      If either text cannot be encoded.
  """
  compress = get_compressor(compress)
  c1 = compressed_length(text1, compress, encoding)
  c2 = compressed_length(text2, compress, encoding)
  c12 = compressed_length(text1 + separator + text2, compress, encoding)

  score = _ncd_similarity(c1, c2, c12)
  logger.debug(f"Similarity calculation: C(x1)={c1}, C(x2)={c2}, "
               f"C(x1x2)={c12}, score={score:.4f}")
  return score


class CompressionDistanceSimilarity:
  """
  Normalized compression distance, expressed as a similarity.

  Compressed lengths of the first argument are cached by exact string
  value. The classifier always passes the training text first, so the
  cache holds one entry per training text and comparing many queries
  against one training set compresses each training text once. Second
  arguments and joint lengths are never cached.

  Parameters
  ----------
  compressor : str, Compressor or callable, optional
      Anything :func:`get_compressor` accepts. Defaults to gzip.
  encoding : str, default='utf-8'
      Text encoding applied before compression.
  separator : str, default=' '
      Inserted between the two texts for the joint measurement.
  cache_lengths : bool, default=True
      Whether to remember per-text compressed lengths.
  """

  def __init__(
      self,
      compressor=None,
      encoding: str = DEFAULT_ENCODING,
      separator: str = DEFAULT_SEPARATOR,
      cache_lengths: bool = True,
  ):
    self.compressor = get_compressor(compressor)
    self.encoding = encoding
    self.separator = separator
    self.cache_lengths = cache_lengths
    self._lengths: dict[str, int] = {}
    self._hits = 0
    self._misses = 0

  def compressed_length(self, text: str) -> int:
    if not self.cache_lengths:
      return compressed_length(text, self.compressor, self.encoding)

    try:
      size = self._lengths[text]
      self._hits += 1
    except KeyError:
      size = compressed_length(text, self.compressor, self.encoding)
      self._lengths[text] = size
      self._misses += 1
    return size

  def __call__(self, text1: str, text2: str) -> float:
    c1 = self.compressed_length(text1)
    c2 = compressed_length(text2, self.compressor, self.encoding)
    c12 = compressed_length(text1 + self.separator + text2,
                            self.compressor, self.encoding)

    score = _ncd_similarity(c1, c2, c12)
    logger.debug(f"Similarity calculation: C(x1)={c1}, C(x2)={c2}, "
                 f"C(x1x2)={c12}, score={score:.4f}")
    return score

  def distance(self, text1: str, text2: str) -> float:
    """Normalized compression distance, ``1 - similarity``."""
    return 1 - self(text1, text2)

  def cache_info(self) -> dict:
    return {'hits': self._hits, 'misses': self._misses,
            'size': len(self._lengths)}

  def clear_cache(self) -> None:
    self._lengths.clear()
    self._hits = 0
    self._misses = 0

  def __repr__(self):
    return (f'CompressionDistanceSimilarity(compressor={self.compressor!r}, '
            f'encoding={self.encoding!r}, separator={self.separator!r})')


class DigitProportionSimilarity:
  """
  Baseline that compares how much of each text is made of digits.

  Scores ``1 - |p(x) - p(y)|`` where ``p`` is the share of decimal-digit
  characters. Texts with similar digit density score near 1 whatever they
  actually say, which makes this useful mainly as a point of comparison.
  """

  @staticmethod
  def digit_proportion(text: str) -> float:
    if not text:
      return 0.0
    return sum(ch.isdecimal() for ch in text) / len(text)

  def __call__(self, text1: str, text2: str) -> float:
    return 1 - abs(self.digit_proportion(text1) - self.digit_proportion(text2))

  def __repr__(self):
    return 'DigitProportionSimilarity()'
