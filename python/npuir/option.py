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
import os
from pathlib import Path
from typing import Any

from hidet.option import get_option as _get_hidet_option
from hidet.option import register_option as _register_hidet_option
from hidet.option import set_option as _set_hidet_option


def _get_default_cache_dir() -> str:
    return str(Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache")) / "npuir")


def _register_options():
    """
    Register all options for the npuir package.
    """
    _register_hidet_option(
        "npuir.cache_dir",
        type_hint="str",
        default_value=_get_default_cache_dir(),
        description="The directory to store the debug outputs.",
    )
    _register_hidet_option(
        "npuir.check_clip_bounds",
        type_hint="bool",
        default_value=False,
        description="Whether type inference rejects clip activations whose clip_min is greater than clip_max.",
    )
    _register_hidet_option(
        "npuir.max_inference_iterations",
        type_hint="int",
        default_value=64,
        description="The maximum number of sweeps the type inference pass makes over a function.",
    )
    _register_hidet_option(
        "npuir.debug.dump_ir",
        type_hint="bool",
        default_value=False,
        description="Whether to dump the IR before and after each pass.",
    )


_register_options()


def get_option(name: str) -> Any:
    """
    Get the value of an option.
    Parameters
    ----------
    name: str
        The name of the option, without the "npuir." prefix.

    Returns
    -------
    value: Any
        The value of the option.
    """
    return _get_hidet_option("npuir." + name)


def cache_dir(dir_path: str | Path) -> None:
    """
    Set the directory to store the debug outputs.

    Parameters
    ----------
    dir_path: str or Path
        The path to the cache directory.
    """
    _set_hidet_option("npuir.cache_dir", str(dir_path))


def check_clip_bounds(enable: bool = True) -> None:
    """
    Enable or disable rejecting clip activations with clip_min > clip_max during type inference.

    The check is disabled by default, so graphs that were accepted before keep being accepted.

    Parameters
    ----------
    enable: bool
        The flag to enable or disable the check. Default is True.
    """
    _set_hidet_option("npuir.check_clip_bounds", enable)


def max_inference_iterations(n: int) -> None:
    """
    Set the maximum number of sweeps the type inference pass makes over a function before giving up on the values
    whose types are still unresolved.

    Parameters
    ----------
    n: int
        The number of sweeps.
    """
    if n < 1:
        raise ValueError("The number of inference iterations must be positive, got {}.".format(n))
    _set_hidet_option("npuir.max_inference_iterations", n)


class debug:
    @staticmethod
    def dump_ir(enable: bool = True) -> None:
        """
        Enable or disable dumping the IR before and after each pass.

        Parameters
        ----------
        enable: bool
            The flag to enable or disable dumping the IR. Default is True.
        """
        return _set_hidet_option("npuir.debug.dump_ir", enable)
