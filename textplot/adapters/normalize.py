from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import numpy as np

from textplot.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


@dataclass(frozen=True, eq=False)
class PointData:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray

    @property
    def size(self) -> int:
        return int(self.x.size)


def normalize_points(points: Any) -> PointData:
    """Coerce ``(x, y)`` pairs into read-only float64 arrays.

    ``points`` may be a sequence of pairs, an ``(N, 2)`` array, a 2-D torch
    tensor or a DataFrame with exactly two numeric columns.
    """
    arr = _coerce_2d_numeric(points)
    if arr.shape[0] == 0:
        raise PlotDataError("empty series")
    return _build(arr[:, 0], arr[:, 1])


def normalize_xy(y: Any, *, x: Any = None) -> PointData:
    y_arr = _coerce_1d_numeric(y, label="y")
    if y_arr.size == 0:
        raise PlotDataError("empty series")

    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = _coerce_1d_numeric(x, label="x")

    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return _build(x_arr, y_arr)


def _build(x: np.ndarray, y: np.ndarray) -> PointData:
    x = np.array(x, dtype=np.float64, copy=True)
    y = np.array(y, dtype=np.float64, copy=True)
    mask = np.isfinite(x) & np.isfinite(y)
    for arr in (x, y, mask):
        arr.setflags(write=False)
    return PointData(x=x, y=y, mask=mask)


def _coerce_2d_numeric(value: Any) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return _check_pairs(tensor.to(torch.float64).numpy())

    if pd is not None and isinstance(value, pd.DataFrame):
        numeric_cols = [c for c in value.columns if _is_numeric_dtype(value[c])]
        if len(numeric_cols) != 2:
            raise PlotDataError("DataFrame input must contain exactly two numeric columns")
        return _check_pairs(value[numeric_cols].to_numpy(dtype=np.float64))

    if isinstance(value, np.ndarray):
        return _check_pairs(_coerce_ndarray(value, label="points"))

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        if len(value) == 0:
            return np.empty((0, 2), dtype=np.float64)
        rows = []
        for i, item in enumerate(value):
            if isinstance(item, (str, bytes, bytearray)) or not isinstance(item, Sequence) or len(item) != 2:
                raise PlotDataError(f"point at index {i} is not an (x, y) pair: {item!r}")
            rows.append(item)
        return _check_pairs(_coerce_ndarray(np.asarray(rows, dtype=object), label="points"))

    raise PlotDataError(f"unsupported points input type: {type(value)!r}")


def _check_pairs(arr: np.ndarray) -> np.ndarray:
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise PlotDataError(f"points must have shape (N, 2), got {arr.shape}")
    return arr


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except Exception:
        return False


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    flat = arr.reshape(-1)
    out = np.empty(flat.shape[0], dtype=np.float64)
    for i, raw in enumerate(flat.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out.reshape(arr.shape)
