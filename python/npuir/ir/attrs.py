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

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Type, TypeVar, Union

from hidet.ir.expr import Expr

from npuir.ir.type import Dim, normalize_dim

E = TypeVar("E", bound="AttrEnum")


class AttrsError(ValueError):
    """
    Raised when the value of an operator attribute does not match its schema.
    """


class AttrEnum(Enum):
    @classmethod
    def lookup(cls: Type[E], name: str) -> Optional[E]:
        for member in cls:
            if member.value == name:
                return member
        return None

    @classmethod
    def parse(cls: Type[E], value: Union[E, str], attr_name: str) -> E:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = cls.lookup(value)
            if member is not None:
                return member
        candidates = ", ".join(repr(m.value) for m in cls)
        raise AttrsError("Invalid value {!r} for {}, expect one of {}.".format(value, attr_name, candidates))

    def __str__(self):
        return self.value


class UnaryOperator(AttrEnum):
    ABS = "ABS"


class Activation(AttrEnum):
    NONE = "NONE"
    CLIP = "CLIP"
    TANH = "TANH"
    SIGMOID = "SIGMOID"
    LUT = "LUT"


class RoundingMode(AttrEnum):
    TFL = "TFL"
    TRUNCATE = "TRUNCATE"
    NATURAL = "NATURAL"


class Layout(AttrEnum):
    NHWC = "NHWC"
    NHCWB16 = "NHCWB16"


def _doc(description: str, **kwargs: Any) -> Any:
    return field(metadata={"doc": description}, **kwargs)


@dataclass(frozen=True)
class Attrs:
    """Base class of operator attribute records.

    Each field of a subclass carries its documentation in the field metadata under the key ``"doc"``.
    """

    @classmethod
    def fields(cls) -> list[str]:
        return [f.name for f in dataclasses.fields(cls)]

    @classmethod
    def describe(cls, name: str) -> str:
        for f in dataclasses.fields(cls):
            if f.name == name:
                return f.metadata.get("doc", "")
        raise KeyError("{} has no attribute named {!r}.".format(cls.__name__, name))

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.fields()}


@dataclass(frozen=True)
class UnaryElementwiseAttrs(Attrs):
    operator_type: Union[UnaryOperator, str] = _doc("The type of the unary elementwise operator. 'ABS'")
    ifm_scale: float = _doc("The quantization scale for the Input Feature Map tensor.")
    ifm_zero_point: int = _doc("The quantization zero point for the Input Feature Map tensor.")
    ofm_scale: float = _doc("The quantization scale for the Output Feature Map tensor.")
    ofm_zero_point: int = _doc("The quantization zero point for the Output Feature Map tensor.")
    ofm_channels: Dim = _doc("The number of OFM channels.")
    activation: Activation = _doc(
        "The activation function to use. "
        "'NONE' - no activation function. "
        "'CLIP' - clip the output between clip_min and clip_max. "
        "'TANH' - tanh activation function. "
        "'SIGMOID' - sigmoid activation function. "
        "'LUT' - use a look-up table to perform the activation function.",
        default=Activation.NONE,
    )
    clip_min: int = _doc("The minimum clipping value if activation = 'CLIP'.", default=0)
    clip_max: int = _doc("The maximum clipping value if activation = 'CLIP'.", default=0)
    rounding_mode: RoundingMode = _doc(
        "The rounding mode to apply to the Output Feature Map tensor. "
        "'TFL' - Tensorflow Lite rounding scheme. "
        "'TRUNCATE' - Truncate towards zero. "
        "'NATURAL' - Round to nearest value, with x.5 rounded up towards +infinity.",
        default=RoundingMode.TFL,
    )
    ifm_layout: Layout = _doc(
        "The layout of the Input Feature Map tensor. Can be 'NHWC' or 'NHCWB16'.", default=Layout.NHWC
    )
    ofm_layout: Layout = _doc(
        "The layout of the Output Feature Map tensor. Can be 'NHWC' or 'NHCWB16'.", default=Layout.NHWC
    )

    @staticmethod
    def create(
        operator_type: Union[UnaryOperator, str],
        ifm_scale: float,
        ifm_zero_point: int,
        ofm_scale: float,
        ofm_zero_point: int,
        ofm_channels: Dim,
        activation: Union[Activation, str] = Activation.NONE,
        clip_min: int = 0,
        clip_max: int = 0,
        rounding_mode: Union[RoundingMode, str] = RoundingMode.TFL,
        ifm_layout: Union[Layout, str] = Layout.NHWC,
        ofm_layout: Union[Layout, str] = Layout.NHWC,
    ) -> UnaryElementwiseAttrs:
        """
        Create the attribute record after checking every value against the schema.

        The operator type is the only attribute that accepts an unknown name: a recognized name is converted into its
        UnaryOperator member while any other string is kept as given, so that type inference can report it on the
        node that carries it.

        Raises
        ------
        AttrsError
            If any attribute has a value of the wrong type or out of its valid range.
        """
        if isinstance(operator_type, str):
            operator_type = UnaryOperator.lookup(operator_type) or operator_type
        elif not isinstance(operator_type, UnaryOperator):
            raise AttrsError("Invalid value {!r} for operator_type, expect a string.".format(operator_type))

        return UnaryElementwiseAttrs(
            operator_type=operator_type,
            ifm_scale=_as_scale(ifm_scale, "ifm_scale"),
            ifm_zero_point=_as_int(ifm_zero_point, "ifm_zero_point"),
            ofm_scale=_as_scale(ofm_scale, "ofm_scale"),
            ofm_zero_point=_as_int(ofm_zero_point, "ofm_zero_point"),
            ofm_channels=_as_channels(ofm_channels, "ofm_channels"),
            activation=Activation.parse(activation, "activation"),
            clip_min=_as_int(clip_min, "clip_min"),
            clip_max=_as_int(clip_max, "clip_max"),
            rounding_mode=RoundingMode.parse(rounding_mode, "rounding_mode"),
            ifm_layout=Layout.parse(ifm_layout, "ifm_layout"),
            ofm_layout=Layout.parse(ofm_layout, "ofm_layout"),
        )


def _as_int(value: Any, attr_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AttrsError("Invalid value {!r} for {}, expect an integer.".format(value, attr_name))
    return int(value)


def _as_scale(value: Any, attr_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AttrsError("Invalid value {!r} for {}, expect a float.".format(value, attr_name))
    if not value > 0:
        raise AttrsError("Invalid value {!r} for {}, expect a positive scale.".format(value, attr_name))
    return float(value)


def _as_channels(value: Any, attr_name: str) -> Dim:
    if isinstance(value, bool) or not isinstance(value, (int, Expr)):
        raise AttrsError("Invalid value {!r} for {}, expect an integer or an expression.".format(value, attr_name))
    value = normalize_dim(value)
    if isinstance(value, int) and value < 0:
        raise AttrsError("Invalid value {!r} for {}, expect a non-negative integer.".format(value, attr_name))
    return value
