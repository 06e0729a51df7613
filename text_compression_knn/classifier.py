"""
Main classifier module for Text Compression KNN.
"""

import logging
from typing import Any, NamedTuple, Optional, Sequence

from .errors import DegenerateInputError, EmptyTrainingSetError
from .similarity import (
  DEFAULT_SEPARATOR,
  CompressionDistanceSimilarity,
  SimilarityFn,
)
from .utils import (
  DEFAULT_ENCODING,
  compute_k,
  rank_by_score,
  validate_training_set,
  vote,
)

logger = logging.getLogger(__name__)

ON_DEGENERATE_POLICIES = ('raise', 'skip')


class TrainingExample(NamedTuple):
  text: str
  label: str


def _check_on_degenerate(on_degenerate: str) -> None:
  if on_degenerate not in ON_DEGENERATE_POLICIES:
    raise ValueError(f"on_degenerate must be one of {ON_DEGENERATE_POLICIES}, "
                     f"got '{on_degenerate}'")


def rank(
    training_set: Sequence[tuple[str, str]],
    query: str,
    similarity_fn: SimilarityFn,
    on_degenerate: str = 'raise'
) -> list[tuple[str, float]]:
  """
  Score every training example against ``query`` and sort by similarity.

  Parameters
  ----------
  training_set : sequence of (text, label)
      Training examples
  query : str
      Text to classify
  similarity_fn : SimilarityFn
      Called as ``similarity_fn(training_text, query)``
  on_degenerate : {'raise', 'skip'}
      What to do when a comparison raises DegenerateInputError. ``'skip'``
      scores that example ``-inf`` so it ranks last.

  Returns
  -------
  list[tuple[str, float]]
      ``(label, score)`` pairs, highest score first, ties in training order
  """
  _check_on_degenerate(on_degenerate)
  if len(training_set) == 0:
    raise EmptyTrainingSetError("Training set must contain at least one example")

  labels = []
  scores = []
  for i, (training_text, label) in enumerate(training_set):
    try:
      score = similarity_fn(training_text, query)
    except DegenerateInputError:
      if on_degenerate == 'raise':
        raise
      logger.warning(f"Degenerate comparison with training sample {i}, "
                     f"ranking it last")
      score = float('-inf')
    logger.debug(f"Similarity to training sample {i}: {score:.4f}")
    labels.append(label)
    scores.append(score)

  return rank_by_score(labels, scores)


def predict(
    training_set: Sequence[tuple[str, str]],
    query: str,
    similarity_fn: SimilarityFn,
    k_fraction: float = 0.3,
    on_degenerate: str = 'raise'
) -> str:
  """
  Predict the label of ``query`` by majority vote of its nearest neighbours.

  ``k = round(len(training_set) * k_fraction)``, never less than 1 nor more
  than the training set size. Neighbours with equal scores are taken in
  training-set order; equal vote counts are won by the label that appears
  first in the ranking.

  Parameters
  ----------
  training_set : sequence of (text, label)
      Training examples
  query : str
      Text to classify
  similarity_fn : SimilarityFn
      Similarity strategy, e.g. :class:`CompressionDistanceSimilarity`
  k_fraction : float, default=0.3
      Share of the training set consulted as neighbours
  on_degenerate : {'raise', 'skip'}
      See :func:`rank`

  Returns
  -------
  str
      Predicted label

  Raises
  ------
  EmptyTrainingSetError
      If ``training_set`` is empty.
  """
  if len(training_set) == 0:
    raise EmptyTrainingSetError("Training set must contain at least one example")

  k = compute_k(len(training_set), k_fraction)
  ranking = rank(training_set, query, similarity_fn, on_degenerate)

  logger.debug(f"K nearest neighbors (k={k}): {ranking[:k]}")
  return vote(ranking, k)


class CompressionKNNClassifier:
  """
  K-Nearest Neighbors text classifier using compression similarity.

  Implements the method from "Low-Resource Text Classification: A
  Parameter-Free Classification Method with Compressors": texts that
  compress well together are treated as neighbours, and the majority label
  among the nearest ones wins. There is no training beyond storing the
  examples.

  Parameters
  ----------
  k : int, optional
      Fixed number of neighbours. When None, ``k_fraction`` decides.
  k_fraction : float, default=0.3
      Share of the training set consulted as neighbours.
  compressor : str, Compressor or callable, optional
      Compressor used by the default similarity. Defaults to gzip.
  encoding : str, default='utf-8'
      Text encoding applied before compression.
  separator : str, default=' '
      Inserted between two texts for joint compression.
  similarity_fn : SimilarityFn, optional
      Replaces the compression similarity entirely.
  cache_lengths : bool, default=True
      Cache per-text compressed lengths across predictions.
  on_degenerate : {'raise', 'skip'}, default='raise'
      Handling of comparisons where both texts compress to 0 bytes.
  verbose : bool, default=False
      Log every comparison at DEBUG level. This sets the level of the
      ``text_compression_knn`` logger, so it is process-wide;
      ``set_params(verbose=False)`` resets that logger to NOTSET.

  Attributes
  ----------
  training_data_ : list[str]
      Training texts after fitting.
  training_labels_ : list[str]
      Training labels after fitting.
  is_fitted_ : bool
      Whether the classifier has been fitted.
  """

  def __init__(
      self,
      k: Optional[int] = None,
      k_fraction: float = 0.3,
      compressor=None,
      encoding: str = DEFAULT_ENCODING,
      separator: str = DEFAULT_SEPARATOR,
      similarity_fn: Optional[SimilarityFn] = None,
      cache_lengths: bool = True,
      on_degenerate: str = 'raise',
      verbose=False,
  ):
    self._check_params(k, k_fraction, on_degenerate)

    self.k = k
    self.k_fraction = k_fraction
    self.compressor = compressor
    self.encoding = encoding
    self.separator = separator
    self.similarity_fn = similarity_fn
    self.cache_lengths = cache_lengths
    self.on_degenerate = on_degenerate
    self.verbose = verbose

    if verbose:
      self._set_verbose(verbose)

    self._similarity = self._build_similarity()

    # Initialize state
    self.training_data_ = []
    self.training_labels_ = []
    self.is_fitted_ = False

  @staticmethod
  def _check_params(k: Optional[int], k_fraction: float, on_degenerate: str) -> None:
    _check_on_degenerate(on_degenerate)
    if k is not None and k < 1:
      raise ValueError(f"k must be at least 1, got {k}")
    if k_fraction <= 0:
      raise ValueError(f"k_fraction must be positive, got {k_fraction}")

  @staticmethod
  def _set_verbose(verbose: bool) -> None:
    # Applies to the package logger, so it affects every instance
    package_logger = logging.getLogger('text_compression_knn')
    package_logger.setLevel(logging.DEBUG if verbose else logging.NOTSET)

  def _build_similarity(self) -> SimilarityFn:
    if self.similarity_fn is not None:
      return self.similarity_fn
    return CompressionDistanceSimilarity(
      compressor=self.compressor,
      encoding=self.encoding,
      separator=self.separator,
      cache_lengths=self.cache_lengths,
    )

  @property
  def training_set_(self) -> list[TrainingExample]:
    return [TrainingExample(text, label)
            for text, label in zip(self.training_data_, self.training_labels_)]

  def _effective_k(self) -> int:
    n = len(self.training_data_)
    if self.k is not None:
      return min(self.k, n)
    return compute_k(n, self.k_fraction)

  def fit(self, X: Sequence[str], y: Sequence[Any]) -> 'CompressionKNNClassifier':
    """
    Fit the classifier with training data.

    Parameters
    ----------
    X : list[str]
        Training texts
    y : list[Any]
        Training labels

    Returns
    -------
    self : CompressionKNNClassifier
        Returns self for method chaining
    """
    validate_training_set(X, y)

    if self.k is not None and self.k > len(X):
      raise ValueError(f"k ({self.k}) cannot be larger than training set size ({len(X)})")

    self.training_data_ = list(X)
    self.training_labels_ = list(y)
    self.is_fitted_ = True

    logger.debug(f"Fitted classifier with {len(X)} training samples, "
                 f"{len(set(y))} unique classes")

    return self

  def rank(self, x: str) -> list[tuple[Any, float]]:
    """
    Rank every training example by similarity to ``x``.

    Returns
    -------
    list[tuple[Any, float]]
        ``(label, score)`` pairs, highest score first
    """
    if not self.is_fitted_:
      raise ValueError("Classifier must be fitted before prediction")

    return rank(self.training_set_, x, self._similarity, self.on_degenerate)

  def predict_single(self, x: str) -> Any:
    """
    Predict the class of a single text.

    Parameters
    ----------
    x : str
        Text to classify

    Returns
    -------
    Any
        Predicted class label
    """
    if not self.is_fitted_:
      raise ValueError("Classifier must be fitted before prediction")

    if self.k is None:
      return predict(self.training_set_, x, self._similarity,
                     k_fraction=self.k_fraction,
                     on_degenerate=self.on_degenerate)

    k = self._effective_k()
    ranking = self.rank(x)
    logger.debug(f"K nearest neighbors (k={k}): {ranking[:k]}")
    return vote(ranking, k)

  def predict(self, X: Sequence[str]) -> list[Any]:
    """
    Predict classes for multiple texts.

    Parameters
    ----------
    X : list[str]
        Texts to classify

    Returns
    -------
    list[Any]
        Predicted class labels
    """
    if not self.is_fitted_:
      raise ValueError("Classifier must be fitted before prediction")

    if len(X) == 0:
      return []

    predictions = []
    for i, text in enumerate(X):
      try:
        pred = self.predict_single(text)
      except Exception as e:
        logger.error(f"Failed to predict for sample {i}: {e}")
        raise
      predictions.append(pred)
      logger.debug(f"Predicted '{pred}' for test sample {i}")

    return predictions

  def get_params(self) -> dict:
    """Get classifier parameters."""
    return {
      'k': self.k,
      'k_fraction': self.k_fraction,
      'compressor': self.compressor,
      'encoding': self.encoding,
      'separator': self.separator,
      'similarity_fn': self.similarity_fn,
      'cache_lengths': self.cache_lengths,
      'on_degenerate': self.on_degenerate,
      'verbose': self.verbose,
    }

  def set_params(self, **params) -> 'CompressionKNNClassifier':
    """Set classifier parameters."""
    valid = self.get_params()
    for key in params:
      if key not in valid:
        raise ValueError(f"Invalid parameter: {key}")

    merged = {**valid, **params}
    self._check_params(merged['k'], merged['k_fraction'], merged['on_degenerate'])
    if (self.is_fitted_ and merged['k'] is not None
        and merged['k'] > len(self.training_data_)):
      raise ValueError(f"k ({merged['k']}) cannot be larger than training set "
                       f"size ({len(self.training_data_)})")

    for key, value in params.items():
      setattr(self, key, value)
    if 'verbose' in params:
      self._set_verbose(params['verbose'])
    self._similarity = self._build_similarity()
    return self
