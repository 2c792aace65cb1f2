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
import pytest
from hidet.ir.dtypes import int32
from hidet.ir.expr import Var
from npuir.ir import Layout, LayoutShapeError, infer_elementwise_output_shape
from npuir.ir.layout import channel_bricks, to_nhcwb16


@pytest.mark.parametrize(
    "ifm_shape, ifm_layout, ofm_layout, ofm_channels, expected",
    [
        ((1, 4, 4, 16), Layout.NHWC, Layout.NHWC, 16, (1, 4, 4, 16)),
        ((1, 4, 1, 4, 16), Layout.NHCWB16, Layout.NHWC, 16, (1, 4, 4, 16)),
        ((1, 4, 4, 16), Layout.NHWC, Layout.NHCWB16, 16, (1, 4, 1, 4, 16)),
        ((1, 8, 3, 6, 16), Layout.NHCWB16, Layout.NHCWB16, 40, (1, 8, 3, 6, 16)),
        ((1, 7, 9, 3), Layout.NHWC, Layout.NHWC, 5, (1, 7, 9, 5)),
        ((1, 7, 9, 17), Layout.NHWC, Layout.NHCWB16, 17, (1, 7, 2, 9, 16)),
    ],
)
def test_infer_elementwise_output_shape(ifm_shape, ifm_layout, ofm_layout, ofm_channels, expected):
    assert infer_elementwise_output_shape(ifm_shape, ifm_layout, ofm_layout, ofm_channels) == expected


@pytest.mark.parametrize(
    "channels, bricks",
    [(1, 1), (15, 1), (16, 1), (17, 2), (32, 2), (33, 3)],
)
def test_channel_bricks(channels, bricks):
    assert channel_bricks(channels) == bricks


def test_symbolic_height():
    h = Var("h", int32)
    shape = infer_elementwise_output_shape((1, h, 4, 8), Layout.NHWC, Layout.NHWC, 8)
    assert shape[1] is h
    assert shape[3] == 8


def test_to_nhcwb16():
    assert to_nhcwb16((1, 2, 3, 20)) == (1, 2, 2, 3, 16)


@pytest.mark.parametrize(
    "ifm_shape, ifm_layout",
    [
        ((4, 4, 16), Layout.NHWC),
        ((1, 4, 4, 16), Layout.NHCWB16),
        ((1, 4, 1, 4, 16, 1), Layout.NHCWB16),
    ],
)
def test_rank_mismatch(ifm_shape, ifm_layout):
    with pytest.raises(LayoutShapeError, match=ifm_layout.value):
        infer_elementwise_output_shape(ifm_shape, ifm_layout, Layout.NHWC, 16)
