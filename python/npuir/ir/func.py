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
from __future__ import annotations as _

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence

from npuir.ir.expr import Call, Operand, Var
from npuir.ir.node import IRNode
from npuir.ir.type import Type


@dataclass(frozen=True, eq=False)
class Function(IRNode):
    name: str
    params: tuple[Var, ...]
    outputs: tuple[Operand, ...]
    # the types of the values, filled by type inference
    checked_types: Mapping[Operand, Type] = field(default_factory=lambda: MappingProxyType({}))

    @staticmethod
    def create(name: str, params: Sequence[Var], outputs: Operand | Sequence[Operand]) -> Function:
        if isinstance(outputs, Operand):
            outputs = [outputs]
        func = Function(name, tuple(params), tuple(outputs))
        free_vars = [v for v in func.post_order() if isinstance(v, Var) and v not in func.params]
        if free_vars:
            raise ValueError(
                "Function {} uses variables that are not its parameters: {}.".format(
                    name, ", ".join(v.name for v in free_vars)
                )
            )
        return func

    def post_order(self) -> list[Operand]:
        """
        Get all values reachable from the outputs, each value after all of its arguments.

        Returns
        -------
        ret: list[Operand]
            The values in topological order. The order is deterministic for a given function.
        """
        order: list[Operand] = []
        visited: set[Operand] = set()
        for output in self.outputs:
            stack: list[tuple[Operand, bool]] = [(output, False)]
            while stack:
                node, expanded = stack.pop()
                if expanded:
                    order.append(node)
                    continue
                if node in visited:
                    continue
                visited.add(node)
                stack.append((node, True))
                if isinstance(node, Call):
                    for arg in reversed(node.args):
                        if arg not in visited:
                            stack.append((arg, False))
        return order

    def calls(self) -> list[Call]:
        return [node for node in self.post_order() if isinstance(node, Call)]

    def with_checked_types(self, types: Mapping[Operand, Type]) -> Function:
        return dataclasses.replace(self, checked_types=MappingProxyType(dict(types)))
