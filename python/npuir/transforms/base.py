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

from pathlib import Path
from typing import Optional, Sequence

from npuir.ir.func import Function
from npuir.transforms.instruments import DumpIRInstrument, PassInstrument


class PassContext:
    _stack: list[PassContext] = []

    def __init__(self, instruments: Optional[Sequence[PassInstrument]] = None):
        self.instruments: list[PassInstrument] = list(instruments) if instruments else []

    def __enter__(self) -> PassContext:
        PassContext._stack.append(self)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        popped = PassContext._stack.pop()
        assert popped is self

    @staticmethod
    def current() -> PassContext:
        if not PassContext._stack:
            return PassContext()
        return PassContext._stack[-1]

    def dump_ir(self, dump_dir: Path) -> None:
        self.instruments.append(DumpIRInstrument(dump_dir))


class Pass:
    def __init__(self):
        self.name: str = self.__class__.__name__

    def __call__(self, func: Function) -> Function:
        ctx = PassContext.current()
        for instrument in ctx.instruments:
            instrument.before_pass(self.name, func)
        func = self.process_function(func)
        for instrument in ctx.instruments:
            instrument.after_pass(self.name, func)
        return func

    def process_function(self, func: Function) -> Function:
        raise NotImplementedError()


def apply_transforms(func: Function, transforms: Sequence[Pass]) -> Function:
    ctx = PassContext.current()
    for instrument in ctx.instruments:
        instrument.before_all_passes(func)
    for transform in transforms:
        func = transform(func)
    for instrument in ctx.instruments:
        instrument.after_all_passes(func)
    return func
