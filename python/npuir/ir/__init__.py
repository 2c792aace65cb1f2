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
from .attrs import Activation, Attrs, AttrsError, Layout, RoundingMode, UnaryElementwiseAttrs, UnaryOperator
from .diagnostics import (
    Diagnostic,
    DiagnosticContext,
    DiagnosticError,
    DiagnosticLevel,
    InternalError,
    Span,
    raise_if_errors,
)
from .expr import Call, Operand, Var
from .func import Function
from .layout import LayoutShapeError, infer_elementwise_output_shape
from .type import Dim, IncompleteType, TensorType, Type, type_equal
from .relation import Failure, Pending, Success, TypeInferenceResult, TypeReporter
