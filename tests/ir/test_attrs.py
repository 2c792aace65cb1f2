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
import dataclasses

import pytest
from hidet.ir.dtypes import int32
from hidet.ir.expr import Var
from npuir.ir import Activation, AttrsError, Layout, RoundingMode, UnaryElementwiseAttrs, UnaryOperator


def make_attrs(**kwargs) -> UnaryElementwiseAttrs:
    params = dict(
        operator_type="ABS",
        ifm_scale=1.0,
        ifm_zero_point=0,
        ofm_scale=1.0,
        ofm_zero_point=0,
        ofm_channels=16,
    )
    params.update(kwargs)
    return UnaryElementwiseAttrs.create(**params)


def test_defaults():
    attrs = make_attrs()
    assert attrs.operator_type is UnaryOperator.ABS
    assert attrs.activation is Activation.NONE
    assert attrs.clip_min == 0 and attrs.clip_max == 0
    assert attrs.rounding_mode is RoundingMode.TFL
    assert attrs.ifm_layout is Layout.NHWC
    assert attrs.ofm_layout is Layout.NHWC


def test_enum_names():
    attrs = make_attrs(activation="CLIP", rounding_mode="NATURAL", ifm_layout="NHCWB16", ofm_layout=Layout.NHWC)
    assert attrs.activation is Activation.CLIP
    assert attrs.rounding_mode is RoundingMode.NATURAL
    assert attrs.ifm_layout is Layout.NHCWB16
    assert attrs.ofm_layout is Layout.NHWC


@pytest.mark.parametrize(
    "kwargs",
    [
        {"activation": "clip"},
        {"rounding_mode": "natural"},
        {"ifm_layout": "nhcwb16"},
        {"ofm_layout": "Nhwc"},
    ],
)
def test_enum_names_are_case_sensitive(kwargs):
    with pytest.raises(AttrsError):
        make_attrs(**kwargs)


@pytest.mark.parametrize("operator_type", ["SQUARE", "abs", "Abs"])
def test_unknown_operator_type_is_kept(operator_type):
    attrs = make_attrs(operator_type=operator_type)
    assert attrs.operator_type == operator_type
    assert not isinstance(attrs.operator_type, UnaryOperator)


def test_symbolic_channels():
    c = Var("c", int32)
    attrs = make_attrs(ofm_channels=c)
    assert attrs.ofm_channels is c


@pytest.mark.parametrize(
    "kwargs",
    [
        {"activation": "RELU"},
        {"rounding_mode": "UP"},
        {"ifm_layout": "NCHW"},
        {"ofm_layout": 3},
        {"ifm_scale": 0.0},
        {"ofm_scale": -1.0},
        {"ifm_scale": "1.0"},
        {"ifm_zero_point": 1.5},
        {"clip_min": True},
        {"ofm_channels": -1},
        {"ofm_channels": 16.0},
        {"operator_type": 1},
    ],
)
def test_schema_violations(kwargs):
    with pytest.raises(AttrsError):
        make_attrs(**kwargs)


def test_record_is_immutable():
    attrs = make_attrs()
    with pytest.raises(dataclasses.FrozenInstanceError):
        attrs.clip_max = 10  # type: ignore


def test_field_documentation():
    assert UnaryElementwiseAttrs.fields()[0] == "operator_type"
    assert len(UnaryElementwiseAttrs.fields()) == 12
    assert "NHCWB16" in UnaryElementwiseAttrs.describe("ifm_layout")
    assert "LUT" in UnaryElementwiseAttrs.describe("activation")
    with pytest.raises(KeyError):
        UnaryElementwiseAttrs.describe("alpha")


def test_as_dict():
    attrs = make_attrs(clip_max=5)
    values = attrs.as_dict()
    assert values["clip_max"] == 5
    assert values["ofm_channels"] == 16
    assert list(values) == UnaryElementwiseAttrs.fields()
