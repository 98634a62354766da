"""
Version-gated emission variants.

The RxJS combinator style and the TypeScript syntax features depend on the
target versions in the generation policy. Both are selected exactly once per
run, so a single output never mixes styles.
"""

from __future__ import annotations

from dataclasses import dataclass

from ts_oas_generator.constants import (
    RXJS_PIPEABLE_OPERATORS,
    RXJS_THROW_ERROR_FACTORY,
    TS_DEFINITE_ASSIGNMENT,
    TS_NULLISH_COALESCING,
    TS_OVERRIDE_MODIFIER,
    TS_STRING_ENUMS,
)


class RxJsEmission:
    """Pipeable-operator style used from RxJS 6."""

    imports: tuple[str, ...] = (
        "import { mergeMap as _observableMergeMap, catchError as _observableCatch } from 'rxjs/operators';",
        "import { Observable, throwError as _observableThrow, of as _observableOf } from 'rxjs';",
    )
    close: str = "}))"

    def of(self, expression: str) -> str:
        return f"_observableOf({expression})"

    def throw(self, expression: str) -> str:
        return f"_observableThrow({expression})"

    def merge_map(self, parameter: str) -> str:
        """Chain a ``mergeMap`` step; the caller closes it with :attr:`close`."""
        return f".pipe(_observableMergeMap(({parameter}) => {{"

    def catch(self, parameter: str) -> str:
        return f".pipe(_observableCatch(({parameter}) => {{"


class RxJsFactoryThrowEmission(RxJsEmission):
    """RxJS 7 deprecates ``throwError(value)`` in favour of an error factory."""

    def throw(self, expression: str) -> str:
        return f"_observableThrow(() => {expression})"


class RxJsPatchEmission(RxJsEmission):
    """Prototype-patching operator style of RxJS 5."""

    imports = (
        "import 'rxjs/add/observable/of';",
        "import 'rxjs/add/observable/throw';",
        "import 'rxjs/add/operator/mergeMap';",
        "import 'rxjs/add/operator/catch';",
        "import { Observable } from 'rxjs/Observable';",
    )
    close = "})"

    def of(self, expression: str) -> str:
        return f"Observable.of({expression})"

    def throw(self, expression: str) -> str:
        return f"Observable.throw({expression})"

    def merge_map(self, parameter: str) -> str:
        return f".flatMap(({parameter}) => {{"

    def catch(self, parameter: str) -> str:
        return f".catch(({parameter}) => {{"


def select_rxjs_emission(rxjs_version: float) -> RxJsEmission:
    if rxjs_version < RXJS_PIPEABLE_OPERATORS:
        return RxJsPatchEmission()
    if rxjs_version < RXJS_THROW_ERROR_FACTORY:
        return RxJsEmission()
    return RxJsFactoryThrowEmission()


@dataclass(frozen=True)
class TypeScriptSyntax:
    """Language features available for the target TypeScript version."""

    version: float

    @property
    def definite_assignment(self) -> bool:
        return self.version >= TS_DEFINITE_ASSIGNMENT

    @property
    def string_enums(self) -> bool:
        return self.version >= TS_STRING_ENUMS

    @property
    def nullish_coalescing(self) -> bool:
        return self.version >= TS_NULLISH_COALESCING

    @property
    def override_modifier(self) -> bool:
        return self.version >= TS_OVERRIDE_MODIFIER

    def definite(self) -> str:
        return "!" if self.definite_assignment else ""

    def override(self) -> str:
        return "override " if self.override_modifier else ""

    def nullish(self, expression: str, fallback: str) -> str:
        """``expression ?? fallback``, spelled out for compilers without the operator."""
        if self.nullish_coalescing:
            return f"{expression} ?? {fallback}"
        return f"{expression} !== undefined && {expression} !== null ? {expression} : {fallback}"
