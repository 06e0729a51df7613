"""
Compressor adapters.

The classifier only ever needs ``compress(data) -> bytes`` and the length of
its output. Anything exposing that method can be used, including the
``gzip``, ``zlib``, ``bz2`` and ``lzma`` standard library modules.
"""

import bz2
import gzip
import logging
import lzma
import zlib
from typing import Callable, Protocol, Union, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Compressor(Protocol):
  """Anything that turns bytes into (usually fewer) bytes."""

  def compress(self, data: bytes) -> bytes:
    ...


class GzipCompressor:
  """
  DEFLATE with gzip framing.

  ``mtime`` is pinned to zero so the same input always yields the same
  bytes, not just the same length.

  Parameters
  ----------
  compresslevel : int, default=9
      zlib compression level, 0-9.
  """

  name = 'gzip'

  def __init__(self, compresslevel: int = 9):
    self.compresslevel = compresslevel

  def compress(self, data: bytes) -> bytes:
    return gzip.compress(data, compresslevel=self.compresslevel, mtime=0)

  def __repr__(self):
    return f'GzipCompressor(compresslevel={self.compresslevel})'


class ZlibCompressor:
  """DEFLATE with the smaller zlib header."""

  name = 'zlib'

  def __init__(self, level: int = 9):
    self.level = level

  def compress(self, data: bytes) -> bytes:
    return zlib.compress(data, self.level)

  def __repr__(self):
    return f'ZlibCompressor(level={self.level})'


class Bz2Compressor:
  name = 'bz2'

  def __init__(self, compresslevel: int = 9):
    self.compresslevel = compresslevel

  def compress(self, data: bytes) -> bytes:
    return bz2.compress(data, compresslevel=self.compresslevel)

  def __repr__(self):
    return f'Bz2Compressor(compresslevel={self.compresslevel})'


class LzmaCompressor:
  name = 'lzma'

  def __init__(self, preset: int = 6):
    self.preset = preset

  def compress(self, data: bytes) -> bytes:
    return lzma.compress(data, preset=self.preset)

  def __repr__(self):
    return f'LzmaCompressor(preset={self.preset})'


class CallableCompressor:
  """Adapt a plain ``bytes -> bytes`` function to the Compressor protocol."""

  def __init__(self, func: Callable[[bytes], bytes]):
    self.func = func

  def compress(self, data: bytes) -> bytes:
    return self.func(data)

  def __repr__(self):
    return f'CallableCompressor({getattr(self.func, "__name__", self.func)!r})'


COMPRESSORS = {
  'gzip': GzipCompressor,
  'zlib': ZlibCompressor,
  'bz2': Bz2Compressor,
  'lzma': LzmaCompressor,
}


def get_compressor(
    compressor: Union[None, str, Compressor, Callable[[bytes], bytes]] = None
) -> Compressor:
  """
  Resolve a compressor name or object to a Compressor instance.

  Parameters
  ----------
  compressor : None, str, Compressor or callable
      ``None`` selects gzip. A string selects one of the built-in adapters
      by name. Objects with a ``compress`` method are returned unchanged and
      bare callables are wrapped in :class:`CallableCompressor`.

  Returns
  -------
  Compressor
      An object with a ``compress(bytes) -> bytes`` method.
  """
  if compressor is None:
    return GzipCompressor()

  if isinstance(compressor, str):
    try:
      factory = COMPRESSORS[compressor.lower()]
    except KeyError:
      raise ValueError(f"Unknown compressor '{compressor}', expected one of "
                       f"{sorted(COMPRESSORS)}") from None
    logger.debug(f"Resolved compressor name '{compressor}' to {factory.__name__}")
    return factory()

  if callable(getattr(compressor, 'compress', None)):
    return compressor

  if callable(compressor):
    return CallableCompressor(compressor)

  raise TypeError("Compressor must be a name, an object with a compress() "
                  f"method or a callable, got {type(compressor).__name__}")
