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

import logging
from pathlib import Path
from typing import Optional

import npuir.option
from npuir.ir.diagnostics import DiagnosticContext, raise_if_errors
from npuir.ir.func import Function
from npuir.ops.registry import OpDef, OpRegistry
from npuir.transforms import InferenceResult, PassContext, TypeInferencePass, apply_transforms

logger = logging.getLogger(__name__)


class CompilerSession:
    """
    The context of one compilation.

    The session owns the operator registry and the diagnostic context used by its passes. The registry is created when
    the session starts. Both are cleared when it closes.

    Parameters
    ----------
    registry: OpRegistry, optional
        The operator registry of the session. When not given, a registry with the builtin operators is created.

    Examples
    --------
    >>> with CompilerSession() as session:
    ...     result = session.infer_types(func)
    """

    def __init__(self, registry: Optional[OpRegistry] = None):
        self.registry: OpRegistry = registry if registry is not None else OpRegistry.with_builtin_ops()
        self.diag_ctx: DiagnosticContext = DiagnosticContext()
        self.closed: bool = False
        logger.debug("session started with %d operators", len(self.registry))

    def __enter__(self) -> CompilerSession:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        if self.closed:
            return
        self.registry.clear()
        self.diag_ctx.clear()
        self.closed = True
        logger.debug("session closed")

    def register_op(self, op_def: OpDef) -> OpDef:
        self._check_open()
        return self.registry.register(op_def)

    def infer_types(self, func: Function, raise_on_error: bool = False) -> InferenceResult:
        """
        Infer the types of all values in a function.

        Parameters
        ----------
        func: Function
            The function to infer.
        raise_on_error: bool
            Whether to raise when any call of the function is ill-typed.

        Returns
        -------
        ret: InferenceResult
            The result of type inference.

        Raises
        ------
        DiagnosticError
            If raise_on_error is True and inference emitted errors.
        """
        self._check_open()
        result = TypeInferencePass(self.registry, self.diag_ctx).run(func)
        if raise_on_error:
            raise_if_errors(result.diagnostics)
        return result

    def check(self, func: Function) -> Function:
        """
        Run type inference as a pass and get the function annotated with the inferred types.

        When the option debug.dump_ir is enabled, the function is dumped before and after the pass.

        Raises
        ------
        DiagnosticError
            If any call of the function is ill-typed.
        """
        self._check_open()
        num_diagnostics = len(self.diag_ctx)
        inference = TypeInferencePass(self.registry, self.diag_ctx)
        with PassContext() as ctx:
            if npuir.option.get_option("debug.dump_ir"):
                ctx.dump_ir(Path(npuir.option.get_option("cache_dir")) / "ir" / func.name)
            checked = apply_transforms(func, [inference])
        raise_if_errors(self.diag_ctx.diagnostics[num_diagnostics:])
        return checked

    def _check_open(self) -> None:
        if self.closed:
            raise RuntimeError("The compiler session has been closed.")
