# Pydantic schemas
from app.schemas.file_tree import (
    FileTreeNodeSchema,
    FileTreeRequest,
    FlattenResponse,
    PreviewRequest,
    PreviewResponse,
    TerminalLineSchema,
    TerminalRequest,
    TerminalResponse,
    TerminalSessionSchema,
    TerminalHistoryRequest,
    TerminalHistoryResponse,
)
from app.schemas.ai import (
    Ideation,
    IdeationRequest,
    GenerateCodeRequest,
    GenerateDocsRequest,
    GenerateTestsRequest,
    WorkflowRequest,
    DocumentationResponse,
    GeneratedSuiteSummary,
    CodeQualityMetrics,
    GeneratedSuiteResponse,
)
