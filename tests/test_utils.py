"""
Tests for utility functions.
"""

import pytest

from text_compression_knn import EncodingError, GzipCompressor
from text_compression_knn.utils import (
  compressed_length,
  compute_k,
  encode_text,
  get_training_set_info,
  rank_by_score,
  validate_training_set,
  vote,
)


class TestComputeK:
  """Test neighbour count computation."""

  @pytest.mark.parametrize('n, fraction, expected', [
    (4, 0.5, 2),
    (10, 0.3, 3),
    (2, 0.3, 1),
    (1, 0.3, 1),
    (2, 0.2, 1),
    (5, 2.0, 5),
    (100, 0.3, 30),
  ])
  def test_values(self, n, fraction, expected):
    assert compute_k(n, fraction) == expected

  def test_never_zero(self):
    assert all(compute_k(n, 0.01) >= 1 for n in range(1, 20))

  def test_invalid_fraction(self):
    with pytest.raises(ValueError, match="k_fraction must be positive"):
      compute_k(10, 0)

  def test_invalid_size(self):
    with pytest.raises(ValueError, match="n_examples must be positive"):
      compute_k(0, 0.3)


class TestRanking:
  """Test ranking and voting."""

  def test_descending_order(self):
    ranking = rank_by_score(['a', 'b', 'c'], [0.2, 0.9, 0.5])
    assert ranking == [('b', 0.9), ('c', 0.5), ('a', 0.2)]

  def test_ties_keep_input_order(self):
    ranking = rank_by_score(['first', 'second', 'third'], [0.5, 0.7, 0.5])
    assert [label for label, _ in ranking] == ['second', 'first', 'third']

  def test_negative_infinity_last(self):
    ranking = rank_by_score(['a', 'b'], [float('-inf'), -3.0])
    assert [label for label, _ in ranking] == ['b', 'a']

  def test_length_mismatch(self):
    with pytest.raises(ValueError, match="same length"):
      rank_by_score(['a'], [0.1, 0.2])

  def test_majority(self):
    ranking = [('A', 0.9), ('B', 0.8), ('B', 0.7), ('A', 0.1)]
    assert vote(ranking, 3) == 'B'

  def test_tie_goes_to_highest_ranked_label(self):
    ranking = [('B', 0.9), ('A', 0.8), ('A', 0.7), ('B', 0.6)]
    assert vote(ranking, 2) == 'B'
    assert vote(ranking, 4) == 'B'

  def test_vote_with_no_neighbours(self):
    with pytest.raises(ValueError, match="no neighbours"):
      vote([], 1)


class TestTextHelpers:
  """Test encoding and size measurement."""

  def test_encode_utf8(self):
    assert encode_text('café') == b'caf\xc3\xa9'

  def test_encode_error(self):
    with pytest.raises(EncodingError, match="ascii"):
      encode_text('café', 'ascii')

  def test_compressed_length(self):
    compressor = GzipCompressor()
    assert compressed_length('abc' * 100, compressor) < compressed_length(
      ''.join(chr(97 + (i * 7) % 26) + str(i) for i in range(100)), compressor)


class TestTrainingSetHelpers:
  """Test training set validation and summaries."""

  def test_validate_ok(self):
    validate_training_set(['a', 'b'], ['x', 'y'])  # Should not raise

  def test_validate_mismatch(self):
    with pytest.raises(ValueError, match="X and y must have the same length"):
      validate_training_set(['a'], ['x', 'y'])

  def test_validate_empty(self):
    with pytest.raises(ValueError, match="Training data cannot be empty"):
      validate_training_set([], [])

  def test_validate_type(self):
    with pytest.raises(TypeError, match="index 1 must be str"):
      validate_training_set(['a', b'b'], ['x', 'y'])

  def test_info(self):
    info = get_training_set_info(['aa', 'bbbb', 'c'], ['x', 'y', 'x'])
    assert info['n_examples'] == 3
    assert info['classes'] == ['x', 'y']
    assert info['class_counts'] == {'x': 2, 'y': 1}
    assert info['min_length'] == 1
    assert info['max_length'] == 4
    assert info['mean_length'] == pytest.approx(7 / 3)
