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
from npuir.ir import Diagnostic, DiagnosticContext, DiagnosticError, Span, raise_if_errors


def test_raise_if_errors():
    raise_if_errors([])

    diag_ctx = DiagnosticContext()
    diag_ctx.emit(Diagnostic.error("bad dtype", span=Span("model.tflite", 3)))
    with pytest.raises(DiagnosticError, match="model.tflite:3:1: error: bad dtype") as info:
        raise_if_errors(diag_ctx)
    assert info.value.diagnostics == tuple(diag_ctx.diagnostics)
