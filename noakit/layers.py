"""Typed data layers stored over the entities of a mesh."""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np

SUPPORTED_DTYPES: tuple[np.dtype, ...] = tuple(
    np.dtype(t)
    for t in (
        np.int8,
        np.uint8,
        np.int16,
        np.uint16,
        np.int32,
        np.uint32,
        np.int64,
        np.uint64,
        np.float32,
        np.float64,
    )
)


def _check_dtype(dtype: Any) -> np.dtype:
    resolved = np.dtype(dtype)
    if resolved not in SUPPORTED_DTYPES:
        raise TypeError(f"Unsupported layer data type: {resolved}")
    return resolved


def _check_size(size: int) -> int:
    size = int(size)
    if size < 0:
        raise ValueError(f"Layer size must be non-negative, got {size}")
    return size


class Layer:
    """One array of values, one per mesh entity, of a single numeric type."""

    def __init__(
        self,
        size: int,
        dtype: Any = np.float64,
        value: Any = 0,
        alias: str = "",
        export_hint: bool = False,
    ) -> None:
        self.alias = alias
        self.export_hint = export_hint
        self._data = np.empty(0, dtype=np.float64)
        self.init(size, dtype, value)

    def init(self, size: int, dtype: Any = np.float64, value: Any = 0) -> None:
        """Replace the layer data with `size` copies of `value` of type `dtype`."""
        self._data = np.full(_check_size(size), value, dtype=_check_dtype(dtype))

    @property
    def data(self) -> np.ndarray:
        """The underlying array."""
        return self._data

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def size(self) -> int:
        return len(self._data)

    def set_size(self, size: int) -> None:
        """Resize the layer, keeping leading values and zero-filling new ones."""
        size = _check_size(size)
        current = len(self._data)
        if size == current:
            return
        resized = np.zeros(size, dtype=self._data.dtype)
        keep = min(size, current)
        resized[:keep] = self._data[:keep]
        self._data = resized

    def set_from(self, values: Iterable[Any]) -> None:
        """Replace the data with `values`, which must match the layer size."""
        array = np.array(values)
        if array.ndim != 1:
            array = array.reshape(-1)
        if len(array) != len(self._data):
            raise ValueError(
                f"Source size {len(array)} must be equal to layer size {len(self._data)}"
            )
        self._data = array.astype(_check_dtype(array.dtype), copy=False)

    def __getitem__(self, index: Any) -> Any:
        return self._data[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        self._data[index] = value

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (
            f"Layer(size={len(self._data)}, dtype={self._data.dtype}, "
            f"alias={self.alias!r}, export_hint={self.export_hint})"
        )


class LayerManager:
    """A collection of layers that all share the same size."""

    def __init__(self, size: int = 0) -> None:
        self._size = _check_size(size)
        self._layers: list[Layer] = []

    @property
    def size(self) -> int:
        return self._size

    def set_size(self, size: int) -> None:
        """Set the size of every stored layer."""
        self._size = _check_size(size)
        for layer in self._layers:
            layer.set_size(self._size)

    def count(self) -> int:
        """Number of stored layers."""
        return len(self._layers)

    def clear(self) -> None:
        """Remove all layers."""
        self._layers.clear()

    def add(self, dtype: Any = np.float64, value: Any = 0) -> int:
        """Add a layer filled with `value` and return its index."""
        self._layers.append(Layer(self._size, dtype, value))
        return len(self._layers) - 1

    def get(self, index: int) -> np.ndarray:
        """Return the data array of the layer at `index`."""
        return self.get_layer(index).data

    def get_layer(self, index: int) -> Layer:
        """Return the layer at `index`."""
        if not 0 <= index < len(self._layers):
            raise IndexError(f"Layer index {index} out of range")
        return self._layers[index]

    def __iter__(self):
        return iter(self._layers)

    def __len__(self) -> int:
        return len(self._layers)