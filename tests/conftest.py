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
from pathlib import Path

import hidet
import pytest

import npuir


def pytest_sessionstart(session):
    """
    Called after the Session object has been created and before performing collection and entering the run test loop.
    """
    # set the cache directory to a subdirectory of the current directory
    npuir.option.cache_dir(Path(__file__).parent / ".test_cache")
    print("Cache directory: {}".format(npuir.option.get_option("cache_dir")))


@pytest.fixture(autouse=True)
def restore_options():
    """
    Restore the options changed by a test.
    """
    names = ["check_clip_bounds", "max_inference_iterations", "debug.dump_ir", "cache_dir"]
    saved = {name: npuir.option.get_option(name) for name in names}
    yield
    for name, value in saved.items():
        hidet.option.set_option("npuir." + name, value)
