# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : resource.py
#   file_relpath : src/keyval/resource.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The three resource verbs: ``check``, ``in`` (get) and ``out`` (put).

[`Resource`][keyval.resource.Resource] composes the build context builder, the
version projector and the file materializer. It is CLI-free: the click commands
in [`keyval.cli`][keyval.cli] decode the request, call one verb and print the
result. Each invocation is one synchronous pass with no state shared between
invocations.

Typical usage:

    resource = Resource(request.source)
    response = resource.put(Path(workdir), PutParams.from_json(request.params))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from keyval.config.logging import get_logger
from keyval.constants import METADATA_FILENAME, VERSION_FILENAME
from keyval.context.build import build_context
from keyval.core.model import GetParams, PutParams, Response, Source, Version, metadata_from
from keyval.expression.jinja import JinjaEvaluator
from keyval.pipeline.materializer import materialize
from keyval.pipeline.projector import Projection, project
from keyval.pipeline.writer import write_json

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from keyval.config.logging import KeyvalLogger
    from keyval.expression.protocols import Evaluator, EvaluatorFactory

logger: KeyvalLogger = get_logger(__name__)


class Resource:
    """KeyVal resource bound to one ``source`` configuration.

    Args:
        source (Source): Resource configuration.
        environ (Mapping[str, str] | None): Environment used for the build context
            and ``env()``; defaults to ``os.environ``.
        evaluator_factory (EvaluatorFactory): Builds the expression evaluator for each verb.
    """

    def __init__(
        self,
        source: Source | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        evaluator_factory: EvaluatorFactory = JinjaEvaluator,
    ) -> None:
        self.source: Source = source or Source()
        self.environ: Mapping[str, str] | None = environ
        self.evaluator_factory: EvaluatorFactory = evaluator_factory

    def _evaluator(self, base_dir: Path | None) -> Evaluator:
        return self.evaluator_factory(base_dir=base_dir, environ=self.environ)

    def check(self, version: Version | None = None) -> list[Version]:
        """Return the versions Concourse should record.

        A prior version is echoed back unchanged (no new versions are ever
        discovered). Without one, the source's ``initial_mapping`` (if any)
        produces the first version.

        Args:
            version (Version | None): The latest version Concourse knows about.

        Returns:
            list[Version]: Zero or one version.
        """
        if version is not None:
            logger.debug("check: echoing prior version")
            return [version]
        if not self.source.initial_mapping:
            logger.debug("check: no prior version and no initial mapping")
            return []
        projection: Projection = project(
            self.source.initial_mapping,
            build_context(self.environ),
            evaluator=self._evaluator(None),
            role="initial",
        )
        return [projection.version]

    def get(self, version: Version, directory: Path, params: GetParams | None = None) -> Response:
        """Write ``version`` (and derived files) into ``directory``.

        Always writes ``version.json`` and ``metadata.json``. Each entry of
        ``params.files`` is evaluated against the build context overlaid with
        the version (version keys win) and written to ``directory``.

        Args:
            version (Version): The version being fetched.
            directory (Path): The step's output directory.
            params (GetParams | None): Step parameters.

        Returns:
            Response: The version unchanged, with the build context as metadata.
        """
        params = params or GetParams()
        context: dict[str, str] = build_context(self.environ)

        write_json(directory, VERSION_FILENAME, version.to_dict())
        write_json(directory, METADATA_FILENAME, context)

        if params.files:
            document: dict[str, object] = {**context, **version}
            written: list[Path] = materialize(
                params.files,
                document,
                directory,
                evaluator=self._evaluator(directory),
                policy=self.source.files_policy,
            )
            logger.info("in: wrote %d file(s)", len(written))

        return Response(version=version, metadata=metadata_from(context))

    def put(self, directory: Path, params: PutParams | None = None) -> Response:
        """Produce a new version from the put mapping.

        The mapping is evaluated against the build context only; relative
        ``file()`` paths resolve against ``directory``.

        Args:
            directory (Path): The step's working directory (contains the build's inputs).
            params (PutParams | None): Step parameters; no mapping means identity.

        Returns:
            Response: The new version, with the build context as metadata.
        """
        params = params or PutParams()
        projection: Projection = project(
            params.effective_mapping,
            build_context(self.environ),
            evaluator=self._evaluator(directory),
            role="put",
        )
        return Response(version=projection.version, metadata=projection.metadata)
