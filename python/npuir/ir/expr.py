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
from typing import TYPE_CHECKING, Optional, Sequence

from npuir.ir.attrs import Attrs
from npuir.ir.diagnostics import Span
from npuir.ir.node import IRNode
from npuir.ir.type import IncompleteType, Type

if TYPE_CHECKING:
    from npuir.ops.registry import OpDef


@dataclass(frozen=True, eq=False)
class Operand(IRNode):
    """Base class of the values that can be passed as arguments of a call."""

    @property
    def span(self) -> Optional[Span]:
        raise NotImplementedError()


@dataclass(frozen=True, eq=False)
class Var(Operand):
    """A graph input.

    Attributes
    ----------
    name: str
        The name hint of the variable.
    type_annotation: Type
        The declared type of the variable. An IncompleteType means the type is provided later.
    """

    name: str
    type_annotation: Type
    var_span: Optional[Span] = None

    @staticmethod
    def create(name: str, type_annotation: Optional[Type] = None, span: Optional[Span] = None) -> Var:
        if type_annotation is None:
            type_annotation = IncompleteType()
        return Var(name=name, type_annotation=type_annotation, var_span=span)

    @property
    def span(self) -> Optional[Span]:
        return self.var_span


@dataclass(frozen=True, eq=False)
class Call(Operand):
    """A call of a registered operator.

    The call owns its attribute record exclusively; the record is created together with the call and never shared
    with another call.
    """

    op: OpDef
    args: tuple[Operand, ...]
    attrs: Attrs
    call_span: Optional[Span] = None

    @staticmethod
    def create(op: OpDef, args: Sequence[Operand], attrs: Attrs, span: Optional[Span] = None) -> Call:
        if len(args) != op.num_inputs:
            raise ValueError("{} expects {} operands, got {}.".format(op.name, op.num_inputs, len(args)))
        if not isinstance(attrs, op.attrs_type):
            raise TypeError(
                "{} expects attributes of type {}, got {}.".format(
                    op.name, op.attrs_type.__name__, type(attrs).__name__
                )
            )
        for arg in args:
            if not isinstance(arg, Operand):
                raise TypeError("The arguments of {} must be graph values, got {}.".format(op.name, type(arg).__name__))
        return Call(op=op, args=tuple(args), attrs=attrs, call_span=span)

    @property
    def op_name(self) -> str:
        return self.op.name

    @property
    def span(self) -> Optional[Span]:
        return self.call_span
