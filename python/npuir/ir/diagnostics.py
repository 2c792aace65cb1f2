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

import difflib
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional


class InternalError(RuntimeError):
    """
    Raised when the compiler itself is used inconsistently (e.g., a type relation receives the wrong number of type
    slots). It indicates a bug in the caller and is never converted into a user diagnostic.
    """


class DiagnosticError(Exception):
    """
    Raised when a diagnostic context holding errors is asked to fail.
    """

    def __init__(self, diagnostics: Iterable[Diagnostic], rendered: str):
        super().__init__(rendered)
        self.diagnostics: tuple[Diagnostic, ...] = tuple(diagnostics)


class DiagnosticLevel(Enum):
    ERROR = "error"


@dataclass(frozen=True)
class Span:
    """The source location a graph node was built from.

    Attributes
    ----------
    source_name: str
        The name of the source, usually a file name or a model name.
    line: int
        The line number, starting from 1.
    column: int
        The column number, starting from 1.
    end_line: int, optional
        The line number of the end of the span. When not provided, the span covers a single location.
    end_column: int, optional
        The column number of the end of the span.
    """

    source_name: str
    line: int
    column: int = 1
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    def __str__(self):
        if self.end_line is None:
            return "{}:{}:{}".format(self.source_name, self.line, self.column)
        return "{}:{}:{}-{}:{}".format(
            self.source_name, self.line, self.column, self.end_line, self.end_column or self.column
        )


@dataclass(frozen=True)
class Diagnostic:
    level: DiagnosticLevel
    message: str
    span: Optional[Span] = None
    op_name: Optional[str] = None

    @staticmethod
    def error(message: str, span: Optional[Span] = None, op_name: Optional[str] = None) -> Diagnostic:
        return Diagnostic(DiagnosticLevel.ERROR, message, span, op_name)

    def is_error(self) -> bool:
        return self.level is DiagnosticLevel.ERROR

    def format(self) -> str:
        location = str(self.span) if self.span is not None else "<unknown>"
        head = "{}: {}: {}".format(location, self.level.value, self.message)
        if self.op_name is not None:
            head += "\n  note: while inferring the type of '{}'".format(self.op_name)
        return head


class DiagnosticContext:
    """
    Collects the diagnostics emitted while checking a graph.

    Emitting an error does not interrupt the caller. The inference engine keeps checking the remaining nodes and the
    collected diagnostics are rendered (or raised) once the pass finishes.
    """

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def errors(self) -> list[Diagnostic]:
        return [diag for diag in self.diagnostics if diag.is_error()]

    def clear(self) -> None:
        self.diagnostics.clear()

    def render(self) -> str:
        return "\n".join(diag.format() for diag in self.diagnostics)


def raise_if_errors(diagnostics: Iterable[Diagnostic]) -> None:
    """
    Raise a DiagnosticError carrying the errors among the given diagnostics, if there is any.
    """
    errors = [diag for diag in diagnostics if diag.is_error()]
    if errors:
        raise DiagnosticError(errors, "\n".join(diag.format() for diag in errors))


def closest_match(name: str, candidates: Iterable[str], n: int = 3) -> list[str]:
    return difflib.get_close_matches(name, list(candidates), n=n, cutoff=0.6)
