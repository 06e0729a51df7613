"""
Tests for compressor adapters.
"""

import gzip
import random
import zlib

import pytest

from text_compression_knn.compressors import (
  Bz2Compressor,
  CallableCompressor,
  Compressor,
  GzipCompressor,
  LzmaCompressor,
  ZlibCompressor,
  get_compressor,
)


class TestAdapters:
  """Test the built-in compressor adapters."""

  @pytest.mark.parametrize('compressor', [
    GzipCompressor(), ZlibCompressor(), Bz2Compressor(), LzmaCompressor()
  ])
  def test_redundant_input_compresses_smaller(self, compressor):
    redundant = b'abc' * 200
    noisy = random.Random(0).randbytes(600)
    assert len(compressor.compress(redundant)) < len(compressor.compress(noisy))

  def test_gzip_is_byte_deterministic(self):
    compressor = GzipCompressor()
    data = b'the same bytes every time'
    assert compressor.compress(data) == compressor.compress(data)
    assert gzip.decompress(compressor.compress(data)) == data

  def test_zlib_output_is_valid(self):
    data = b'hello hello hello'
    assert zlib.decompress(ZlibCompressor().compress(data)) == data

  def test_callable_compressor(self):
    compressor = CallableCompressor(lambda data: data[:1])
    assert compressor.compress(b'xyz') == b'x'
    assert isinstance(compressor, Compressor)


class TestGetCompressor:
  """Test compressor resolution."""

  def test_default_is_gzip(self):
    assert isinstance(get_compressor(), GzipCompressor)

  @pytest.mark.parametrize('name, expected', [
    ('gzip', GzipCompressor),
    ('zlib', ZlibCompressor),
    ('bz2', Bz2Compressor),
    ('LZMA', LzmaCompressor),
  ])
  def test_by_name(self, name, expected):
    assert isinstance(get_compressor(name), expected)

  def test_unknown_name(self):
    with pytest.raises(ValueError, match="Unknown compressor 'snappy'"):
      get_compressor('snappy')

  def test_object_passed_through(self):
    compressor = ZlibCompressor(level=1)
    assert get_compressor(compressor) is compressor

  def test_module_satisfies_protocol(self):
    assert get_compressor(gzip) is gzip

  def test_plain_function_wrapped(self):
    resolved = get_compressor(zlib.compress)
    assert isinstance(resolved, CallableCompressor)
    assert resolved.compress(b'data') == zlib.compress(b'data')

  def test_invalid_type(self):
    with pytest.raises(TypeError, match="Compressor must be"):
      get_compressor(42)
