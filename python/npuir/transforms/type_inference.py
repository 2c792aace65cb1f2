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
Type inference over graph functions.

Each operator registers a type relation. The pass visits the calls of a function in topological order and invokes the
relation of each call with the types of its operands. A relation answers with one of three results:

- Success: the output type of the call, which the pass assigns into the type slot of the call;
- Pending: an operand type is not known yet, the call is visited again in the next sweep;
- Failure: the call is ill-typed, a diagnostic has been emitted and the pass moves on to the other calls.

The sweeps stop when every call is resolved or a sweep makes no progress.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import npuir.option
from npuir.ir.diagnostics import Diagnostic, DiagnosticContext
from npuir.ir.expr import Call, Operand
from npuir.ir.func import Function
from npuir.ir.relation import Failure, Pending, Success, TypeInferenceResult, TypeReporter
from npuir.ir.type import IncompleteType, TensorType, Type, type_equal
from npuir.ops.registry import OpRegistry
from npuir.transforms.base import Pass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InferenceResult:
    types: dict[Operand, Type]
    failed: tuple[Call, ...]
    unresolved: tuple[Call, ...]
    diagnostics: tuple[Diagnostic, ...]

    @property
    def ok(self) -> bool:
        return not self.failed and not self.unresolved and not any(diag.is_error() for diag in self.diagnostics)

    def type_of(self, node: Operand) -> Type:
        return self.types[node]


class TypeInferencePass(Pass):
    def __init__(self, registry: OpRegistry, diag_ctx: Optional[DiagnosticContext] = None):
        super().__init__()
        self.registry: OpRegistry = registry
        self.diag_ctx: DiagnosticContext = diag_ctx if diag_ctx is not None else DiagnosticContext()
        self.result: Optional[InferenceResult] = None

    def process_function(self, func: Function) -> Function:
        self.result = self.run(func)
        return func.with_checked_types(self.result.types)

    def run(self, func: Function) -> InferenceResult:
        num_diagnostics = len(self.diag_ctx)
        types: dict[Operand, Type] = {param: param.type_annotation for param in func.params}
        calls = func.calls()
        for call in calls:
            # a function checked before keeps its output types, the relations must agree with them
            types[call] = func.checked_types.get(call, IncompleteType())

        failed: list[Call] = []
        pending: list[Call] = list(calls)
        max_iterations = npuir.option.get_option("max_inference_iterations")
        for iteration in range(max_iterations):
            remaining: list[Call] = []
            for call in pending:
                result = self.visit_Call(call, types)
                if isinstance(result, Success):
                    types[call] = result.type
                elif isinstance(result, Failure):
                    failed.append(call)
                else:
                    remaining.append(call)
            progress = len(remaining) < len(pending)
            pending = remaining
            logger.debug(
                "type inference of %s: sweep %d, %d unresolved, %d failed",
                func.name,
                iteration,
                len(pending),
                len(failed),
            )
            if not pending or not progress:
                break

        return InferenceResult(
            types=types,
            failed=tuple(failed),
            unresolved=tuple(pending),
            diagnostics=tuple(self.diag_ctx.diagnostics[num_diagnostics:]),
        )

    def visit_Call(self, call: Call, types: dict[Operand, Type]) -> TypeInferenceResult:
        reporter = TypeReporter(self.diag_ctx, span=call.span, op_name=call.op_name)
        if call.op not in self.registry:
            return reporter.error("Operator {} is not registered in the current session.".format(call.op_name))

        slots: list[Type] = [types[arg] for arg in call.args] + [types[call]]
        result = call.op.type_rel(slots, len(call.args), call.attrs, reporter)

        if isinstance(result, Success):
            return self.unify(call, slots[-1], result, reporter)
        elif isinstance(result, Pending):
            logger.debug("deferred %s: %s", call.op_name, result.reason or "operand types are unresolved")
        elif isinstance(result, Failure):
            logger.debug("failed to infer %s: %s", call.op_name, result.diagnostic.message)
        else:
            raise TypeError("Type relation {} returned {}.".format(call.op.rel_name, type(result).__name__))
        return result

    @staticmethod
    def unify(call: Call, slot: Type, result: Success, reporter: TypeReporter) -> TypeInferenceResult:
        if isinstance(slot, TensorType) and not type_equal(slot, result.type):
            return reporter.error(
                "Type mismatch for {}: the output was typed {} but the relation {} inferred {}.".format(
                    call.op_name, slot, call.op.rel_name, result.type
                )
            )
        return result


def infer_types(
    func: Function, registry: OpRegistry, diag_ctx: Optional[DiagnosticContext] = None
) -> InferenceResult:
    """
    Infer the types of all values in a function.

    Parameters
    ----------
    func: Function
        The function to infer.
    registry: OpRegistry
        The registry to look up the type relations of the operators in.
    diag_ctx: DiagnosticContext, optional
        The context to emit diagnostics into. A fresh context is used when not given.

    Returns
    -------
    ret: InferenceResult
        The inferred types, the ill-typed and unresolved calls, and the diagnostics emitted during inference.
    """
    return TypeInferencePass(registry, diag_ctx).run(func)


def type_inference_pass(registry: OpRegistry, diag_ctx: Optional[DiagnosticContext] = None) -> TypeInferencePass:
    return TypeInferencePass(registry, diag_ctx)


__all__ = [
    "Success",
    "Pending",
    "Failure",
    "TypeInferenceResult",
    "TypeReporter",
    "InferenceResult",
    "TypeInferencePass",
    "infer_types",
    "type_inference_pass",
]
