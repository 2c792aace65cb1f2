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
"""
Quantized unary elementwise operator of the Arm(R) Ethos(TM)-U NPUs.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from hidet.ir.dtypes import int8, uint8

import npuir.option
from npuir.ir.attrs import Activation, Layout, RoundingMode, UnaryElementwiseAttrs, UnaryOperator
from npuir.ir.diagnostics import InternalError, Span
from npuir.ir.expr import Call, Operand
from npuir.ir.layout import LayoutShapeError, infer_elementwise_output_shape
from npuir.ir.relation import Pending, Success, TypeInferenceResult, TypeReporter
from npuir.ir.type import Dim, IncompleteType, TensorType, Type
from npuir.ops.registry import Argument, OpDef

OP_NAME = "contrib.ethosu.unary_elementwise"

SUPPORTED_OPERATORS: tuple[UnaryOperator, ...] = (UnaryOperator.ABS,)

SUPPORTED_DTYPES = (uint8, int8)


def unary_elementwise_rel(
    types: Sequence[Type], num_inputs: int, attrs: UnaryElementwiseAttrs, reporter: TypeReporter
) -> TypeInferenceResult:
    """
    The type relation of the unary elementwise operator.

    Parameters
    ----------
    types: Sequence[Type]
        The type slots of the call: the type of ifm, the type of lut and the current type of the output.
    num_inputs: int
        The number of inputs of the call.
    attrs: UnaryElementwiseAttrs
        The attributes of the call.
    reporter: TypeReporter
        The reporter to emit diagnostics through.

    Returns
    -------
    ret: TypeInferenceResult
        Success with the output type, Pending when the type of ifm is unknown, or Failure when the call violates the
        hardware contract of the operator.

    Raises
    ------
    InternalError
        If the number of type slots or the attribute record does not match the operator registration.
    """
    ifm_index = 0
    result_index = 2
    if len(types) != result_index + 1 or num_inputs != result_index:
        raise InternalError(
            "{} expects {} type slots for {} inputs, got {} for {} inputs.".format(
                OP_NAME, result_index + 1, result_index, len(types), num_inputs
            )
        )

    ifm = types[ifm_index]
    if not isinstance(ifm, TensorType):
        return Pending("the type of ifm is unknown")

    if not isinstance(attrs, UnaryElementwiseAttrs):
        raise InternalError("{} expects UnaryElementwiseAttrs, got {}.".format(OP_NAME, type(attrs).__name__))

    operator_type = attrs.operator_type
    if operator_type not in SUPPORTED_OPERATORS:
        return reporter.error(
            "Invalid operator: expected {} {} for operator_type but was {}".format(
                OP_NAME, " or ".join(repr(op.value) for op in SUPPORTED_OPERATORS), operator_type
            )
        )

    if ifm.dtype.name not in [dtype.name for dtype in SUPPORTED_DTYPES]:
        return reporter.error(
            "Invalid operator: expected {} input data type of type(uint8) or type(int8) but was {}".format(
                OP_NAME, ifm.dtype.name
            )
        )

    if npuir.option.get_option("check_clip_bounds") and attrs.activation is Activation.CLIP:
        if attrs.clip_min > attrs.clip_max:
            return reporter.error(
                "Invalid operator: expected {} clip_min <= clip_max but was clip_min={}, clip_max={}".format(
                    OP_NAME, attrs.clip_min, attrs.clip_max
                )
            )

    try:
        ofm_shape = infer_elementwise_output_shape(ifm.shape, attrs.ifm_layout, attrs.ofm_layout, attrs.ofm_channels)
    except LayoutShapeError as e:
        return reporter.error("Invalid operator: {} input does not match ifm_layout: {}".format(OP_NAME, e))

    return Success(TensorType.create(ofm_shape, ifm.dtype))


def infer_unary_elementwise_type(
    ifm_type: Type, lut_type: Type, attrs: UnaryElementwiseAttrs, reporter: TypeReporter
) -> TypeInferenceResult:
    return unary_elementwise_rel([ifm_type, lut_type, IncompleteType()], 2, attrs, reporter)


UNARY_ELEMENTWISE_OP = OpDef.create(
    name=OP_NAME,
    description="""Quantized unary elementwise operator for Arm(R) Ethos(TM)-U NPUs.

This operator corresponds to the hardware-implemented quantized unary elementwise operation found on NPUs. It accepts
either NHWC or NHCWB16 format for the input data (input feature maps, or IFMs).

Reference: https://developer.arm.com/documentation/102420/0200/

- **ifm**: NHWC - (1, ifm_height, ifm_width, ifm_channels)
           NHCWB16 - (1, ifm_height, ifm_channels // 16, ifm_width, 16)
- **ofm**: (1, ofm_height, ofm_width, ofm_channels)
""",
    arguments=[
        Argument("ifm", "Tensor", "The Input Feature Map tensor (IFM)."),
        Argument("lut", "Tensor", "The look-up table values to use if activation = 'LUT'."),
    ],
    support_level=11,
    attrs_type=UnaryElementwiseAttrs,
    rel_name="EthosuUnaryElementwise",
    type_rel=unary_elementwise_rel,
)


def ethosu_unary_elementwise(
    ifm: Operand,
    lut: Operand,
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
    span: Optional[Span] = None,
) -> Call:
    """
    Build a call of the quantized unary elementwise operator.

    Parameters
    ----------
    ifm: Operand
        The Input Feature Map tensor (IFM).
    lut: Operand
        The look-up table values to use if activation = "LUT".
    operator_type: UnaryOperator or str
        The type of the unary elementwise operator. "ABS"
    ifm_scale: float
        The quantization scale for the Input Feature Map tensor.
    ifm_zero_point: int
        The quantization zero point for the Input Feature Map tensor.
    ofm_scale: float
        The quantization scale for the Output Feature Map tensor.
    ofm_zero_point: int
        The quantization zero point for the Output Feature Map tensor.
    ofm_channels: Dim
        The number of OFM channels.
    activation: Activation or str
        The activation function to use.
            "NONE" - no activation function.
            "CLIP" - clip the output between clip_min and clip_max.
            "TANH" - tanh activation function.
            "SIGMOID" - sigmoid activation function.
            "LUT" - use a look-up table to perform the activation function.
    clip_min: int
        The minimum clipping value if activation = "CLIP".
    clip_max: int
        The maximum clipping value if activation = "CLIP".
    rounding_mode: RoundingMode or str
        The rounding mode to apply to the Output Feature Map tensor.
            "TFL" - Tensorflow Lite rounding scheme.
            "TRUNCATE" - Truncate towards zero.
            "NATURAL" - Round to nearest value, with x.5 rounded up towards +infinity.
    ifm_layout: Layout or str
        The layout of the Input Feature Map tensor. Can be "NHWC" or "NHCWB16".
    ofm_layout: Layout or str
        The layout of the Output Feature Map tensor. Can be "NHWC" or "NHCWB16".
    span: Span, optional
        The source location of the operator.

    Returns
    -------
    ret: Call
        The call of the operator. Its type is inferred later by the type inference pass.
    """
    attrs = UnaryElementwiseAttrs.create(
        operator_type=operator_type,
        ifm_scale=ifm_scale,
        ifm_zero_point=ifm_zero_point,
        ofm_scale=ofm_scale,
        ofm_zero_point=ofm_zero_point,
        ofm_channels=ofm_channels,
        activation=activation,
        clip_min=clip_min,
        clip_max=clip_max,
        rounding_mode=rounding_mode,
        ifm_layout=ifm_layout,
        ofm_layout=ofm_layout,
    )
    return Call.create(UNARY_ELEMENTWISE_OP, [ifm, lut], attrs, span=span)
