# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : __init__.py
#   file_relpath : src/keyval/expression/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mapping expression evaluation.

The pipeline talks to the expression engine only through the
[`Evaluator`][keyval.expression.protocols.Evaluator] protocol. The bundled
implementation, [`JinjaEvaluator`][keyval.expression.jinja.JinjaEvaluator],
evaluates sandboxed Jinja2 expressions extended with the KeyVal functions and
filters from [`keyval.expression.functions`][keyval.expression.functions].
"""

from __future__ import annotations

from keyval.expression.jinja import JinjaEvaluator, JinjaExpression
from keyval.expression.protocols import CompiledExpression, Evaluator, EvaluatorFactory

__all__: list[str] = [
    "CompiledExpression",
    "Evaluator",
    "EvaluatorFactory",
    "JinjaEvaluator",
    "JinjaExpression",
]
