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
from typing import Any, Dict, Mapping, Optional

from hidet.ir.expr import Expr
from hidet.utils.doc import Doc, NewLine, Text, doc_join

from npuir.ir.attrs import AttrEnum, Attrs
from npuir.ir.expr import Call, Operand, Var
from npuir.ir.func import Function
from npuir.ir.type import IncompleteType, TensorType, Type


class IRPrinter:
    """
    Print graph functions and values in a textual form.

    Parameters
    ----------
    types: Mapping[Operand, Type], optional
        The types of the values, usually the result of type inference. When given, every binding is followed by a
        comment with the type of the bound value.
    """

    def __init__(self, types: Optional[Mapping[Operand, Type]] = None) -> None:
        from hidet.ir.tools import IRPrinter as HidetIRPrinter

        self.printer = HidetIRPrinter()
        self.types: Mapping[Operand, Type] = types if types is not None else {}
        self.value2name: Dict[Operand, str] = {}

    def __call__(self, node: Any) -> Doc:
        return self.visit(node)

    def visit(self, node: Any) -> Doc:
        if isinstance(node, Function):
            return self.visit_Function(node)
        elif isinstance(node, Call):
            return self.visit_Call(node)
        elif isinstance(node, Var):
            return self.visit_Var(node)
        elif isinstance(node, (TensorType, IncompleteType)):
            return self.visit_Type(node)
        elif isinstance(node, Attrs):
            return self.visit_Attrs(node)
        elif isinstance(node, Expr):
            return self.printer(node)
        elif isinstance(node, AttrEnum):
            return Text(repr(node.value))
        elif isinstance(node, (list, tuple)):
            return doc_join([self.visit(item) for item in node], ", ")
        elif isinstance(node, (int, float, bool, str)) or node is None:
            return Text(repr(node)) if isinstance(node, str) else Text(str(node))
        else:
            raise NotImplementedError("Can not print {}".format(type(node).__name__))

    def visit_Function(self, func: Function) -> Doc:
        if not self.types:
            self.types = func.checked_types
        params_doc = doc_join([self.visit(p) + ": " + self.visit(p.type_annotation) for p in func.params], ", ")
        head_doc = Text("def ") + func.name + "(" + params_doc + "):"

        body_doc = Doc()
        for call in func.calls():
            body_doc += NewLine() + self.visit_Binding(call)
        body_doc += NewLine() + Text("return ") + self.visit(list(func.outputs))
        return head_doc + body_doc.indent(4)

    def visit_Binding(self, call: Call) -> Doc:
        name = self.name_of(call)
        doc = Text(name) + " = " + call.op_name + "(" + self.visit(list(call.args))
        doc += ", " + self.visit(call.attrs) + ")"
        if call in self.types:
            doc += "  # " + self.visit(self.types[call])
        return doc

    def visit_Call(self, call: Call) -> Doc:
        if call in self.value2name:
            return Text(self.value2name[call])
        # a call printed on its own is shown inline
        return Text(call.op_name) + "(" + self.visit(list(call.args)) + ", " + self.visit(call.attrs) + ")"

    def visit_Var(self, var: Var) -> Doc:
        return Text("%" + var.name)

    def visit_Attrs(self, attrs: Attrs) -> Doc:
        return doc_join([Text(k + "=") + self.visit(v) for k, v in attrs.as_dict().items()], ", ")

    def visit_Type(self, tp: Type) -> Doc:
        if isinstance(tp, TensorType):
            return Text("Tensor[(") + self.visit(list(tp.shape)) + "), " + tp.dtype.name + "]"
        return Text(str(tp))

    def name_of(self, call: Call) -> str:
        if call not in self.value2name:
            self.value2name[call] = "%" + str(len(self.value2name))
        return self.value2name[call]
