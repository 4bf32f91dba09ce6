# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : jinja.py
#   file_relpath : src/keyval/expression/jinja.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Jinja2-backed [`Evaluator`][keyval.expression.protocols.Evaluator].

A mapping is a single Jinja2 *expression* (the part you would write between
``{{`` and ``}}``), evaluated to a native Python value rather than rendered to
text. The input document is exposed as ``this`` and, key by key, as top-level
names. A key that collides with a function or global (``env``, ``file``,
``range``, ...) is not exposed at top level and must be read as ``this.<key>``::

    {"id": ksuid(), "ref": file("repo/ref").strip().upper(), "url": build_url}

    this | format_yaml

Expressions run in Jinja2's immutable sandbox: unsafe attributes are blocked
and the input document cannot be modified. Undefined names fail loudly
(``StrictUndefined``), including undefined values nested inside a returned
object or list.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from jinja2 import StrictUndefined, TemplateSyntaxError, Undefined, UndefinedError
from jinja2.sandbox import ImmutableSandboxedEnvironment

from keyval.config.logging import get_logger
from keyval.constants import DOCUMENT_NAME
from keyval.core.errors import CompileError, EvaluationError
from keyval.expression.functions import DEFAULT_FILTERS, default_functions

if TYPE_CHECKING:
    from pathlib import Path

    from jinja2.environment import TemplateExpression

    from keyval.config.logging import KeyvalLogger
    from keyval.expression.protocols import CompiledExpression

logger: KeyvalLogger = get_logger(__name__)


@dataclass(frozen=True)
class JinjaExpression:
    """A compiled Jinja2 mapping expression."""

    source: str
    role: str
    template: TemplateExpression


def _undefined_message(value: Undefined) -> str:
    # StrictUndefined raises its descriptive UndefinedError on conversion.
    try:
        str(value)
    except UndefinedError as exc:
        return str(exc.message)
    return "undefined value"


def _find_undefined(value: object, path: str) -> tuple[str, Undefined] | None:
    """Return the first undefined value nested in ``value`` with its path."""
    if isinstance(value, Undefined):
        return path, value
    if isinstance(value, Mapping):
        for k, v in value.items():
            found = _find_undefined(v, f"{path}.{k}")
            if found is not None:
                return found
    elif isinstance(value, (list, tuple)):
        for i, v in enumerate(value):
            found = _find_undefined(v, f"{path}[{i}]")
            if found is not None:
                return found
    return None


class JinjaEvaluator:
    """Evaluate mapping expressions with a sandboxed Jinja2 environment.

    Args:
        base_dir (Path | None): Directory relative ``file()`` paths resolve against.
        environ (Mapping[str, str] | None): Environment visible to ``env()``.
        functions (Mapping[str, Callable[..., Any]] | None): Extra functions; override
            the defaults on name collision.
        filters (Mapping[str, Callable[..., Any]] | None): Extra filters; override
            the defaults on name collision.
    """

    def __init__(
        self,
        *,
        base_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
        functions: Mapping[str, Callable[..., Any]] | None = None,
        filters: Mapping[str, Callable[..., Any]] | None = None,
    ) -> None:
        self.env = ImmutableSandboxedEnvironment(undefined=StrictUndefined)
        self.env.globals.update(default_functions(base_dir=base_dir, environ=environ))
        self.env.globals.update(functions or {})
        self.env.filters.update(DEFAULT_FILTERS)
        self.env.filters.update(filters or {})

    def compile(self, source: str, *, role: str) -> JinjaExpression:
        """Compile a mapping expression.

        Unknown filters are detected here; unknown functions and names only
        fail at evaluation time.

        Args:
            source (str): Mapping source text.
            role (str): Mapping role named in error messages.

        Returns:
            JinjaExpression: The compiled expression.

        Raises:
            CompileError: If ``source`` is not a valid expression.
        """
        try:
            template: TemplateExpression = self.env.compile_expression(
                source, undefined_to_none=False
            )
        except TemplateSyntaxError as exc:
            raise CompileError(role, f"line {exc.lineno}: {exc.message}") from exc
        logger.trace("compiled %s mapping: %r", role, source)
        return JinjaExpression(source=source, role=role, template=template)

    def evaluate(self, expr: CompiledExpression, document: Mapping[str, object]) -> object:
        """Evaluate ``expr`` against ``document``.

        Args:
            expr (CompiledExpression): An expression returned by
                [`compile()`][keyval.expression.jinja.JinjaEvaluator.compile].
            document (Mapping[str, object]): The input document.

        Returns:
            object: The native evaluation result.

        Raises:
            EvaluationError: If evaluation fails or yields an undefined value.
        """
        if not isinstance(expr, JinjaExpression):
            raise TypeError(f"expected a JinjaExpression, got: {type(expr).__name__}")

        # Functions and globals win over document keys of the same name.
        context: dict[str, Any] = {}
        shadowed: list[str] = []
        for key, value in document.items():
            if key in self.env.globals:
                shadowed.append(key)
            else:
                context[key] = value
        if shadowed:
            logger.debug(
                "%s mapping: keys only reachable via %s: %s",
                expr.role,
                DOCUMENT_NAME,
                sorted(shadowed),
            )
        context[DOCUMENT_NAME] = dict(document)
        try:
            result: Any = expr.template(context)
        except Exception as exc:
            # Mapping code is user-supplied: any exception is an evaluation failure.
            detail: str = getattr(exc, "message", None) or str(exc) or type(exc).__name__
            raise EvaluationError(expr.role, detail) from exc

        found = _find_undefined(result, "result")
        if found is not None:
            path, undefined = found
            raise EvaluationError(expr.role, f"{path}: {_undefined_message(undefined)}")

        logger.debug("evaluated %s mapping to %s", expr.role, type(result).__name__)
        return result
