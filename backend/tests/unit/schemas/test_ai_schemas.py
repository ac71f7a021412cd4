"""
Unit Tests for Pydantic Schemas
"""
import pytest
from pydantic import ValidationError

from app.schemas import (
    FileTreeNodeSchema,
    Ideation,
    TerminalRequest,
    WorkflowRequest,
)

from tests.mocks.mock_claude import MOCK_IDEATION


class TestIdeationSchema:
    """Tests for Ideation"""

    def test_camel_case_input(self):
        ideation = Ideation.model_validate(MOCK_IDEATION)

        assert ideation.project_name == "TaskFlow"
        assert ideation.color_scheme.primary == "#6366f1"
        assert ideation.user_flow[0] == "Sign in"

    def test_snake_case_input(self):
        ideation = Ideation(project_name="Snake", target_audience="Developers")
        assert ideation.target_audience == "Developers"

    def test_dump_by_alias_uses_camel_case(self):
        data = Ideation(project_name="X").model_dump(by_alias=True)

        assert data["projectName"] == "X"
        assert "techStack" in data
        assert data["colorScheme"]["accent"] == "#ec4899"

    def test_project_name_required(self):
        with pytest.raises(ValidationError):
            Ideation.model_validate({"description": "nameless"})

    def test_unknown_fields_ignored(self):
        ideation = Ideation.model_validate({"projectName": "X", "mood": "happy"})
        assert not hasattr(ideation, "mood")


class TestFileTreeNodeSchema:
    """Tests for the wire shape of tree nodes"""

    def test_nested_document(self, sample_document):
        schema = FileTreeNodeSchema.model_validate(sample_document)

        assert schema.type == "folder"
        assert schema.children[0].name == "src"

    def test_content_must_be_string(self):
        with pytest.raises(ValidationError):
            FileTreeNodeSchema.model_validate({"name": "a", "type": "file", "content": 1})

    def test_name_must_be_single_segment(self):
        with pytest.raises(ValidationError):
            FileTreeNodeSchema.model_validate({"name": "a/b", "type": "file"})


class TestRequestSchemas:
    """Tests for request bodies"""

    def test_workflow_defaults(self):
        request = WorkflowRequest(prompt="todo")
        assert request.include_tests is False

    def test_terminal_request_default_session(self, sample_document):
        request = TerminalRequest(file_tree=sample_document, command="ls")

        assert request.session.cwd == "/project-root"
        assert request.session.history == []
