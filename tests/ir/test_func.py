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
from hidet.ir.dtypes import uint8
from npuir.ir import Function, TensorType, Var
from npuir.ops import ethosu_unary_elementwise


def abs_call(ifm, lut, **kwargs):
    return ethosu_unary_elementwise(ifm, lut, "ABS", 1.0, 0, 1.0, 0, 16, **kwargs)


def test_post_order():
    x = Var.create("x", TensorType.create([1, 4, 4, 16], uint8))
    lut = Var.create("lut")
    a = abs_call(x, lut)
    b = abs_call(a, lut)
    c = abs_call(a, b)
    func = Function.create("main", [x, lut], c)

    order = func.post_order()
    assert order.index(x) < order.index(a) < order.index(b) < order.index(c)
    assert order.index(lut) < order.index(a)
    assert len(order) == 5
    assert func.calls() == [a, b, c]


def test_free_variables_are_rejected():
    x = Var.create("x")
    lut = Var.create("lut")
    with pytest.raises(ValueError, match="lut"):
        Function.create("main", [x], abs_call(x, lut))


def test_print_function():
    x = Var.create("x", TensorType.create([1, 4, 4, 16], uint8))
    lut = Var.create("lut")
    func = Function.create("main", [x, lut], abs_call(x, lut))
    text = str(func)
    assert text.startswith("def main(%x: Tensor[(1, 4, 4, 16), uint8], %lut: ?):")
    assert "%0 = contrib.ethosu.unary_elementwise(%x, %lut, operator_type='ABS'" in text
    assert "ifm_layout='NHWC'" in text
    assert "return %0" in text
