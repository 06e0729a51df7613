"""
Shared fixtures and stub compressors for the test suite.
"""

import pytest


class DistinctBytesCompressor:
  """Output length equals the number of distinct input bytes."""

  def compress(self, data: bytes) -> bytes:
    return bytes(sorted(set(data)))


class EmptyCompressor:
  """Compresses everything to nothing."""

  def compress(self, data: bytes) -> bytes:
    return b''


@pytest.fixture
def distinct_bytes_compressor():
  return DistinctBytesCompressor()


@pytest.fixture
def empty_compressor():
  return EmptyCompressor()


@pytest.fixture
def letter_and_digit_texts():
  """Two clearly separable classes, letters versus digits."""
  texts = [
    'abababababababababababababababab',
    'aabbaabbaabbaabbaabbaabbaabbaabb',
    'abbaabbaabbaabbaabbaabbaabbaabba',
    '01010101010101010101010101010101',
    '00110011001100110011001100110011',
    '01100110011001100110011001100110',
  ]
  labels = ['letters', 'letters', 'letters', 'digits', 'digits', 'digits']
  return texts, labels
