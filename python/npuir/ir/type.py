# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from hidet.ir.expr import Constant, Expr
from hidet.ir.tools import simplify
from hidet.ir.type import DataType

Dim = Union[int, Expr]


class Type:
    """Base class of the types assigned to graph values."""

    def is_resolved(self) -> bool:
        return False


@dataclass(frozen=True)
class IncompleteType(Type):
    """The type of a value that has not been determined yet.

    Attributes
    ----------
    hint: str
        A free-form hint used when printing the type.
    """

    hint: str = "?"

    def __str__(self):
        return "?{}".format(self.hint) if self.hint != "?" else "?"


@dataclass(frozen=True, eq=False)
class TensorType(Type):
    """The type of a tensor value.

    Attributes
    ----------
    shape: tuple[Dim, ...]
        The shape of the tensor. Each dimension is either a python integer or a symbolic hidet expression.
    dtype: DataType
        The data type of the tensor elements.
    """

    shape: tuple[Dim, ...]
    dtype: DataType

    @staticmethod
    def create(shape: Sequence[Dim], dtype: DataType) -> TensorType:
        """
        Create a TensorType, folding constant dimensions into python integers.

        Parameters
        ----------
        shape: Sequence[Dim]
            The shape of the tensor.
        dtype: DataType
            The data type of the tensor elements.

        Returns
        -------
        ret: TensorType
            The created tensor type.
        """
        if not isinstance(dtype, DataType):
            raise TypeError("Expect a hidet DataType as the dtype, got {}.".format(type(dtype).__name__))
        return TensorType(shape=normalize_shape(shape), dtype=dtype)

    def is_resolved(self) -> bool:
        return True

    @property
    def ndim(self) -> int:
        return len(self.shape)

    def __eq__(self, other):
        return isinstance(other, TensorType) and type_equal(self, other)

    def __hash__(self):
        return hash((self.dtype.name, tuple(d if isinstance(d, int) else str(d) for d in self.shape)))

    def __str__(self):
        dims = ", ".join(str(d) for d in self.shape)
        if len(self.shape) == 1:
            dims += ","
        return "Tensor[({}), {}]".format(dims, self.dtype.name)


def normalize_dim(dim: Dim) -> Dim:
    if isinstance(dim, bool):
        raise TypeError("Expect an integer or an expression as a dimension, got {}.".format(dim))
    if isinstance(dim, int):
        return dim
    if isinstance(dim, Expr):
        folded = simplify(dim)
        if isinstance(folded, Constant):
            return int(folded)
        # keep the symbolic dimension as given
        return dim
    raise TypeError("Expect an integer or an expression as a dimension, got {}.".format(type(dim).__name__))


def normalize_shape(shape: Sequence[Dim]) -> tuple[Dim, ...]:
    return tuple(normalize_dim(dim) for dim in shape)


def dim_equal(lhs: Dim, rhs: Dim) -> bool:
    if isinstance(lhs, int) and isinstance(rhs, int):
        return lhs == rhs
    elif isinstance(lhs, Expr) and isinstance(rhs, Expr):
        # there is no equivalence checking for symbolic expressions, compare them structurally
        return lhs is rhs or str(lhs) == str(rhs)
    else:
        return False


def type_equal(lhs: Type, rhs: Type) -> bool:
    if type(lhs) is not type(rhs):
        return False
    if isinstance(lhs, TensorType) and isinstance(rhs, TensorType):
        if lhs.dtype.name != rhs.dtype.name:
            return False
        if len(lhs.shape) != len(rhs.shape):
            return False
        return all(dim_equal(a, b) for a, b in zip(lhs.shape, rhs.shape))
    elif isinstance(lhs, IncompleteType) and isinstance(rhs, IncompleteType):
        return True
    else:
        raise NotImplementedError("type_equal for {}".format(type(lhs).__name__))
