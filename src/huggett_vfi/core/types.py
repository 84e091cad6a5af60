# huggett_vfi/core/types.py
"""
Global type definitions for TensorFlow and NumPy precision.

This module establishes a single source of truth for numerical precision
across the entire codebase, ensuring consistency between TensorFlow
operations and NumPy array manipulations.

Example:
    >>> from huggett_vfi.core.types import TENSORFLOW_DTYPE, NUMPY_DTYPE
    >>> import tensorflow as tf
    >>> tensor = tf.constant([1.0, 2.0], dtype=TENSORFLOW_DTYPE)
"""

import tensorflow as tf
import numpy as np
from typing import Union

# -----------------------------------------------------------------------------
# Global Precision Settings
# -----------------------------------------------------------------------------
# Value functions mix the -1e7 infeasibility penalty with utilities of order
# 1e-1; everything runs in float64.

TENSORFLOW_DTYPE = tf.float64
NUMPY_DTYPE = np.float64

INDEX_DTYPE = tf.int32
NUMPY_INDEX_DTYPE = np.int32

# -----------------------------------------------------------------------------
# Type Aliases
# -----------------------------------------------------------------------------

Tensor = tf.Tensor
Array = np.ndarray
Numeric = Union[float, np.float64, tf.Tensor]
