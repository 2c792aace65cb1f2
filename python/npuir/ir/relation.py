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
from typing import Optional, Union

from npuir.ir.diagnostics import Diagnostic, DiagnosticContext, Span
from npuir.ir.type import TensorType


@dataclass(frozen=True)
class Success:
    type: TensorType


@dataclass(frozen=True)
class Pending:
    reason: str = ""


@dataclass(frozen=True)
class Failure:
    diagnostic: Diagnostic


TypeInferenceResult = Union[Success, Pending, Failure]


class TypeReporter:
    """
    The channel a type relation reports through. It knows the span and the operator of the call being inferred.
    """

    def __init__(self, diag_ctx: DiagnosticContext, span: Optional[Span] = None, op_name: Optional[str] = None):
        self.diag_ctx: DiagnosticContext = diag_ctx
        self.span: Optional[Span] = span
        self.op_name: Optional[str] = op_name

    def error(self, message: str) -> Failure:
        diagnostic = Diagnostic.error(message, span=self.span, op_name=self.op_name)
        self.diag_ctx.emit(diagnostic)
        return Failure(diagnostic)
