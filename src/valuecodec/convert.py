"""
Normalization of outbound Python values.

Values coming from NumPy and pandas are converted to their built-in
Python equivalents before type inference and serialization, so the rest
of the codec only has to reason about plain Python types:

1. NumPy scalars (float, integer, bool) become float/int/bool
2. NumPy datetime64 becomes datetime.datetime, NaT becomes None
3. float NaN (plain or NumPy) and pandas NA/NaT become None
4. NumPy arrays become (nested) lists
"""
import datetime
import logging
import math
from typing import Any

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

NUMPY_SCALAR_TYPES = (np.floating, np.integer, np.unsignedinteger, np.bool_)


def _convert_numpy_value(val: Any) -> Any:
    """Convert NumPy scalar value to Python type."""
    if isinstance(val, np.floating) and np.isnan(val):
        return None

    if isinstance(val, np.datetime64):
        if np.isnat(val):
            return None
        micros = val.astype('datetime64[us]').astype(np.int64).item()
        logger.debug(f'Converting np.datetime64 to Python datetime: {val}')
        return datetime.datetime(1970, 1, 1) + datetime.timedelta(microseconds=micros)

    if isinstance(val, NUMPY_SCALAR_TYPES):
        return val.item()

    return val


class TypeConverter:
    """Convert NumPy and pandas values to plain Python values.
    """

    @staticmethod
    def convert_value(value: Any) -> Any:
        """Convert a single value to its plain Python equivalent."""
        if value is None:
            return None

        if isinstance(value, float) and math.isnan(value):
            return None

        if value is pd.NaT or value is pd.NA:
            return None

        if isinstance(value, pd.Timestamp):
            return value.to_pydatetime()

        if isinstance(value, (*NUMPY_SCALAR_TYPES, np.datetime64)):
            return _convert_numpy_value(value)

        if isinstance(value, np.ndarray):
            return value.tolist()

        return value

    @staticmethod
    def convert_params(params: Any) -> Any:
        """Convert a collection of values, recursing into lists and tuples."""
        if isinstance(params, np.ndarray):
            params = params.tolist()

        if isinstance(params, list | tuple):
            return type(params)(TypeConverter.convert_params(v) for v in params)

        return TypeConverter.convert_value(params)
