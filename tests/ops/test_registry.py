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
from npuir.ir import UnaryElementwiseAttrs
from npuir.ops import UNARY_ELEMENTWISE_OP, OpDef, OpRegistry, unary_elementwise_rel


def test_builtin_ops():
    registry = OpRegistry.with_builtin_ops()
    assert len(registry) == 1
    assert "contrib.ethosu.unary_elementwise" in registry
    assert UNARY_ELEMENTWISE_OP in registry
    assert registry.get("contrib.ethosu.unary_elementwise") is UNARY_ELEMENTWISE_OP
    assert list(registry) == [UNARY_ELEMENTWISE_OP]


def test_unary_elementwise_registration():
    op = UNARY_ELEMENTWISE_OP
    assert op.num_inputs == 2
    assert [arg.name for arg in op.arguments] == ["ifm", "lut"]
    assert all(arg.type_key == "Tensor" for arg in op.arguments)
    assert "look-up table" in op.arguments[1].description
    assert op.support_level == 11
    assert op.attrs_type is UnaryElementwiseAttrs
    assert op.rel_name == "EthosuUnaryElementwise"
    assert op.type_rel is unary_elementwise_rel
    assert "NHCWB16" in op.description


def test_duplicate_registration():
    registry = OpRegistry.with_builtin_ops()
    with pytest.raises(ValueError):
        registry.register(UNARY_ELEMENTWISE_OP)


def test_unknown_op_suggests_close_names():
    registry = OpRegistry.with_builtin_ops()
    with pytest.raises(KeyError, match="contrib.ethosu.unary_elementwise"):
        registry.get("contrib.ethosu.unary_elementwize")


def test_registries_are_independent():
    first = OpRegistry.with_builtin_ops()
    second = OpRegistry()
    custom = OpDef.create(
        name="contrib.ethosu.custom",
        description="",
        arguments=[],
        support_level=11,
        attrs_type=UnaryElementwiseAttrs,
        rel_name="Custom",
        type_rel=unary_elementwise_rel,
    )
    second.register(custom)
    assert "contrib.ethosu.custom" not in first
    assert "contrib.ethosu.unary_elementwise" not in second

    first.clear()
    assert len(first) == 0
    assert UNARY_ELEMENTWISE_OP not in first
