# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : test_projector_property.py
#   file_relpath : tests/pipeline/test_projector_property.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for version projection.

Properties:
1) the identity mapping reproduces any string → string document, and
2) validation names exactly the keys holding non-string values.
"""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given, settings

from keyval.core.errors import ValidationError
from keyval.core.model import Version
from keyval.expression.jinja import JinjaEvaluator
from keyval.pipeline.projector import project
from tests.strategies_keyval import s_mixed_data, s_version_data

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

EVALUATOR = JinjaEvaluator(environ={})


@settings(deadline=None, max_examples=50)
@given(data=s_version_data)
def test_identity_projection_reproduces_document(data: dict[str, str]) -> None:
    """``this`` projects every string document onto an equal version."""
    projection = project("this", data, evaluator=EVALUATOR, role="put")

    assert projection.version == data
    assert [m.name for m in projection.metadata] == sorted(data)


@settings(deadline=None, max_examples=50)
@given(data=s_mixed_data)
def test_validation_reports_exactly_the_bad_keys(data: dict[str, Any]) -> None:
    """Every non-string value is reported; string values never are."""
    bad: list[str] = sorted(k for k, v in data.items() if not isinstance(v, str))

    if not bad:
        assert Version.from_mapping(data) == data
        return

    with pytest.raises(ValidationError) as excinfo:
        Version.from_mapping(data)
    assert excinfo.value.keys == bad
