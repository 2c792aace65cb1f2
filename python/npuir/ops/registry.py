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
from typing import TYPE_CHECKING, Callable, Iterator, Sequence, Type

from npuir.ir.attrs import Attrs
from npuir.ir.diagnostics import closest_match

if TYPE_CHECKING:
    from npuir.ir.type import Type as IRType
    from npuir.ir.relation import TypeInferenceResult, TypeReporter

    TypeRelation = Callable[[Sequence[IRType], int, Attrs, TypeReporter], TypeInferenceResult]


@dataclass(frozen=True)
class Argument:
    name: str
    type_key: str
    description: str


@dataclass(frozen=True, eq=False)
class OpDef:
    """The definition of an operator.

    Attributes
    ----------
    name: str
        The unique name of the operator, e.g., "contrib.ethosu.unary_elementwise".
    description: str
        The human-readable documentation of the operator.
    num_inputs: int
        The number of positional operands of the operator.
    arguments: tuple[Argument, ...]
        The documentation of each operand.
    support_level: int
        The support level of the operator, used by tooling to decide whether the operator is eligible.
    attrs_type: Type[Attrs]
        The type of the attribute record attached to the calls of the operator.
    rel_name: str
        The name of the type relation.
    type_rel: TypeRelation
        The type relation invoked by the type inference engine for every call of the operator.
    """

    name: str
    description: str
    num_inputs: int
    arguments: tuple[Argument, ...]
    support_level: int
    attrs_type: Type[Attrs]
    rel_name: str
    type_rel: TypeRelation

    @staticmethod
    def create(
        name: str,
        description: str,
        arguments: Sequence[Argument],
        support_level: int,
        attrs_type: Type[Attrs],
        rel_name: str,
        type_rel: TypeRelation,
    ) -> OpDef:
        return OpDef(
            name=name,
            description=description,
            num_inputs=len(arguments),
            arguments=tuple(arguments),
            support_level=support_level,
            attrs_type=attrs_type,
            rel_name=rel_name,
            type_rel=type_rel,
        )

    def __str__(self):
        return self.name


class OpRegistry:
    """
    The table that maps operator names to their definitions.

    A registry is owned by a compiler session. It is filled when the session starts and cleared when the session
    ends, so that two sessions never observe each other's registrations.
    """

    def __init__(self) -> None:
        self._ops: dict[str, OpDef] = {}

    @staticmethod
    def with_builtin_ops() -> OpRegistry:
        registry = OpRegistry()
        for op_def in builtin_op_defs():
            registry.register(op_def)
        return registry

    def register(self, op_def: OpDef) -> OpDef:
        if op_def.name in self._ops:
            raise ValueError("Operator {} has already been registered.".format(op_def.name))
        self._ops[op_def.name] = op_def
        return op_def

    def get(self, name: str) -> OpDef:
        if name not in self._ops:
            hint = closest_match(name, self._ops.keys())
            msg = "Operator {} is not registered.".format(name)
            if hint:
                msg += " Did you mean {}?".format(", ".join(hint))
            raise KeyError(msg)
        return self._ops[name]

    def clear(self) -> None:
        self._ops.clear()

    def __contains__(self, item: OpDef | str) -> bool:
        if isinstance(item, OpDef):
            return self._ops.get(item.name) is item
        return item in self._ops

    def __iter__(self) -> Iterator[OpDef]:
        return iter(self._ops.values())

    def __len__(self) -> int:
        return len(self._ops)


def builtin_op_defs() -> list[OpDef]:
    from npuir.ops.unary_elementwise import UNARY_ELEMENTWISE_OP

    return [UNARY_ELEMENTWISE_OP]
