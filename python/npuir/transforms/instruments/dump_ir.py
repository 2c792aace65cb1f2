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
import shutil
import time
from pathlib import Path

import tabulate

from npuir.ir.func import Function
from npuir.ir.tools import IRPrinter
from npuir.transforms.instruments.instrument import PassInstrument


class DumpIRInstrument(PassInstrument):
    def __init__(self, dump_dir: Path):
        self.dump_dir: Path = Path(dump_dir)
        self.count: int = 0
        self.start_time: dict[str, float] = {}
        self.elapsed_time: dict[str, float] = {}

    def before_all_passes(self, func: Function) -> None:
        # remove the old dump directory
        shutil.rmtree(self.dump_dir, ignore_errors=True)
        self.dump_dir.mkdir(parents=True, exist_ok=True)

        with open(self.dump_dir / "0_Original.txt", "w") as f:
            f.write(str(IRPrinter()(func)))

        self.count = 1

    def before_pass(self, pass_name: str, func: Function) -> None:
        self.start_time[pass_name] = time.time()

    def after_pass(self, pass_name: str, func: Function) -> None:
        self.elapsed_time[pass_name] = time.time() - self.start_time[pass_name]

        self.dump_dir.mkdir(parents=True, exist_ok=True)
        with open(self.dump_dir / f"{self.count}_{pass_name}.txt", "w") as f:
            f.write(str(IRPrinter()(func)))

        self.count += 1

    def after_all_passes(self, func: Function) -> None:
        headers = ["Pass", "Time"]
        rows = []
        for name, elapsed_time in self.elapsed_time.items():
            rows.append([name, "{:.3f} seconds".format(elapsed_time)])
        with open(self.dump_dir / "pass_time.txt", "w") as f:
            f.write(tabulate.tabulate(rows, headers=headers))
