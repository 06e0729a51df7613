"""
Text Compression KNN - A library for k-nearest neighbors text classification using compressors.

This library implements the compression-based classification method from
"Low-Resource Text Classification: A Parameter-Free Classification Method with Compressors":
texts are compared by how well they compress together, and the majority label among
the most similar training texts is predicted.
"""

from .classifier import CompressionKNNClassifier, TrainingExample, predict, rank
from .compressors import (
  Bz2Compressor,
  CallableCompressor,
  Compressor,
  GzipCompressor,
  LzmaCompressor,
  ZlibCompressor,
  get_compressor,
)
from .errors import (
  CompressionKNNError,
  DegenerateInputError,
  EmptyTrainingSetError,
  EncodingError,
)
from .similarity import (
  CompressionDistanceSimilarity,
  DigitProportionSimilarity,
  SimilarityFn,
  similarity,
)
from .utils import compressed_length, compute_k, get_training_set_info

__version__ = "0.1.0"

__all__ = [
    "CompressionKNNClassifier",
    "TrainingExample",
    "predict",
    "rank",
    "similarity",
    "SimilarityFn",
    "CompressionDistanceSimilarity",
    "DigitProportionSimilarity",
    "Compressor",
    "GzipCompressor",
    "ZlibCompressor",
    "Bz2Compressor",
    "LzmaCompressor",
    "CallableCompressor",
    "get_compressor",
    "compressed_length",
    "compute_k",
    "get_training_set_info",
    "CompressionKNNError",
    "EmptyTrainingSetError",
    "DegenerateInputError",
    "EncodingError",
]
