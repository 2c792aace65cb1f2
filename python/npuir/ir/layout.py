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
Shape computations of the feature map layouts used by the NPU.

NHWC     - (batch, height, width, channels)
NHCWB16  - (batch, height, ceil(channels / 16), width, 16)
"""

from __future__ import annotations

from typing import Sequence

from npuir.ir.attrs import Layout
from npuir.ir.type import Dim, normalize_dim, normalize_shape

BRICK_SIZE = 16

_layout_rank: dict[Layout, int] = {Layout.NHWC: 4, Layout.NHCWB16: 5}


class LayoutShapeError(ValueError):
    """
    Raised when a shape does not conform to the layout it is declared with.
    """


def layout_rank(layout: Layout) -> int:
    return _layout_rank[layout]


def channel_bricks(channels: Dim) -> Dim:
    """
    Get the number of 16-channel bricks needed to hold the given number of channels in NHCWB16 layout.

    Parameters
    ----------
    channels: Dim
        The number of channels. It can be an integer or a symbolic expression.

    Returns
    -------
    ret: Dim
        The number of bricks, ceil(channels / 16).
    """
    if isinstance(channels, int):
        return (channels + BRICK_SIZE - 1) // BRICK_SIZE
    return normalize_dim((channels + (BRICK_SIZE - 1)) // BRICK_SIZE)


def to_nhcwb16(shape: Sequence[Dim]) -> tuple[Dim, ...]:
    n, h, w, c = _check_rank(shape, Layout.NHWC)
    return normalize_shape([n, h, channel_bricks(c), w, BRICK_SIZE])


def infer_elementwise_output_shape(
    ifm_shape: Sequence[Dim], ifm_layout: Layout, ofm_layout: Layout, ofm_channels: Dim
) -> tuple[Dim, ...]:
    """
    Infer the output shape of an elementwise NPU operator.

    The batch, height and width are taken from the input feature map, the channel dimension is replaced by the
    declared number of output channels, and the result is laid out in the output layout.

    Parameters
    ----------
    ifm_shape: Sequence[Dim]
        The shape of the input feature map, laid out in ifm_layout.
    ifm_layout: Layout
        The layout of the input feature map.
    ofm_layout: Layout
        The layout of the output feature map.
    ofm_channels: Dim
        The number of output channels.

    Returns
    -------
    ret: tuple[Dim, ...]
        The shape of the output feature map, laid out in ofm_layout.

    Raises
    ------
    LayoutShapeError
        If the rank of ifm_shape does not match ifm_layout.
    """
    shape = _check_rank(ifm_shape, ifm_layout)
    if ifm_layout is Layout.NHCWB16:
        n, h, w = shape[0], shape[1], shape[3]
    else:
        n, h, w = shape[0], shape[1], shape[2]

    if ofm_layout is Layout.NHCWB16:
        return to_nhcwb16([n, h, w, ofm_channels])
    return normalize_shape([n, h, w, ofm_channels])


def _check_rank(shape: Sequence[Dim], layout: Layout) -> tuple[Dim, ...]:
    if len(shape) != layout_rank(layout):
        raise LayoutShapeError(
            "Expect a tensor of rank {} for layout {}, got shape ({}).".format(
                layout_rank(layout), layout.value, ", ".join(str(d) for d in shape)
            )
        )
    return tuple(shape)
