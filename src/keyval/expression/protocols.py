# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : protocols.py
#   file_relpath : src/keyval/expression/protocols.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Protocols for pluggable expression engines.

Any embeddable expression or template engine can drive the pipeline as long as
it implements [`Evaluator`][keyval.expression.protocols.Evaluator]:

- ``compile()`` turns mapping source text into a
  [`CompiledExpression`][keyval.expression.protocols.CompiledExpression], raising
  [`CompileError`][keyval.core.errors.CompileError] for invalid mappings.
- ``evaluate()`` runs a compiled expression against an input document, raising
  [`EvaluationError`][keyval.core.errors.EvaluationError] on runtime failures.

Results are plain Python values (``str``, ``bytes``, mappings, lists, scalars)
and are classified with [`keyval.core.values.classify`][keyval.core.values.classify].
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


class CompiledExpression(Protocol):
    """A compiled mapping expression.

    Attributes:
        source (str): The mapping source text.
        role (str): Mapping role named in error messages (``put``, ``file 'x.yml'``...).
    """

    @property
    def source(self) -> str:
        """The mapping source text."""
        ...

    @property
    def role(self) -> str:
        """Mapping role named in error messages."""
        ...


class Evaluator(Protocol):
    """Compiles and evaluates mapping expressions."""

    def compile(self, source: str, *, role: str) -> CompiledExpression:
        """Compile ``source``.

        Args:
            source (str): Mapping source text.
            role (str): Mapping role named in error messages.

        Returns:
            CompiledExpression: The compiled expression.
        """
        ...

    def evaluate(self, expr: CompiledExpression, document: Mapping[str, object]) -> object:
        """Evaluate ``expr`` against ``document``.

        Args:
            expr (CompiledExpression): An expression returned by ``compile()``.
            document (Mapping[str, object]): The input document.

        Returns:
            object: The evaluation result.
        """
        ...


class EvaluatorFactory(Protocol):
    """Builds an evaluator bound to a working directory and environment."""

    def __call__(
        self,
        *,
        base_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Evaluator:
        """Return a new evaluator.

        Args:
            base_dir (Path | None): Directory relative ``file()`` paths resolve against.
            environ (Mapping[str, str] | None): Environment visible to ``env()``.

        Returns:
            Evaluator: The evaluator.
        """
        ...
