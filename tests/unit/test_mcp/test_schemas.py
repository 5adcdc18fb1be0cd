"""Unit tests for tool input schemas and the result envelope."""

import json

import pytest
from pydantic import ValidationError

from unmarkdown_mcp.schemas import (
    ConvertMarkdownInput,
    InvocationResult,
    ListDocumentsInput,
    PublishDocumentInput,
    UpdateDocumentInput,
)


@pytest.mark.unit
class TestToolInputs:
    """Tests for the pydantic tool input models."""

    def test_only_supplied_fields(self):
        input_data = ConvertMarkdownInput(markdown="# x", theme_mode="dark")
        assert input_data.supplied() == {"markdown": "# x", "theme_mode": "dark"}

    def test_supplied_follows_declaration_order(self):
        input_data = ConvertMarkdownInput.model_validate({"template_id": "t", "markdown": "m", "destination": "word"})
        assert list(input_data.supplied()) == ["markdown", "destination", "template_id"]

    def test_explicit_none_kept_for_nullable(self):
        input_data = UpdateDocumentInput.model_validate({"id": "d1", "folder": None})
        assert input_data.supplied(exclude={"id"}) == {"folder": None}

    def test_explicit_none_discarded_elsewhere(self):
        input_data = PublishDocumentInput.model_validate({"id": "d1", "slug": None, "visibility": "public"})
        assert input_data.supplied(exclude={"id"}) == {"visibility": "public"}

    def test_models_are_frozen(self):
        input_data = ListDocumentsInput(limit=5)
        with pytest.raises(ValidationError):
            input_data.limit = 10  # type: ignore[misc]

    def test_schema_forbids_extra_arguments(self):
        assert ListDocumentsInput.model_json_schema()["additionalProperties"] is False


@pytest.mark.unit
class TestInvocationResult:
    """Tests for the result envelope."""

    def test_success_shape(self):
        result = InvocationResult.success({"b": 1, "a": [True, None]})
        assert result.to_dict() == {
            "ok": True,
            "payload": {"b": 1, "a": [True, None]},
            "rendered_as": '{\n  "b": 1,\n  "a": [\n    true,\n    null\n  ]\n}',
        }

    def test_success_keeps_unicode(self):
        assert InvocationResult.success({"title": "Café"}).rendered_as == '{\n  "title": "Café"\n}'

    def test_success_with_scalar_payload(self):
        assert InvocationResult.success(None).rendered_as == "null"

    def test_failure_shape(self):
        result = InvocationResult.failure("Error: boom")
        assert result.to_dict() == {"ok": False, "rendered_as": "Error: boom"}
        assert "payload" not in result.to_dict()

    def test_rendering_round_trips(self):
        payload = {"documents": [{"id": "1", "title": "A"}], "next_cursor": None}
        assert json.loads(InvocationResult.success(payload).rendered_as) == payload
