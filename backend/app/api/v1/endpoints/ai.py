"""
AI Generation Endpoints

Ideation and code generation call the model; documentation and test
generation are template-driven and work on the tree the client sends.
Every route in this module shares the per-IP AI rate limit.
"""

from datetime import datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.exceptions import (
    AIServiceError,
    MalformedInputError,
    ValidationError,
    error_response,
)
from app.core.logging_config import logger
from app.core.rate_limiter import ai_rate_limit
from app.modules.agents import (
    coder_agent,
    documentation_agent,
    ideation_agent,
    orchestrator,
    tester_agent,
)
from app.modules.filetree import egest, ingest
from app.schemas.ai import (
    DocumentationResponse,
    GenerateCodeRequest,
    GenerateDocsRequest,
    GenerateTestsRequest,
    GeneratedSuiteResponse,
    Ideation,
    IdeationRequest,
    WorkflowRequest,
)

router = APIRouter(prefix="/ai", tags=["AI Generation"])


def _validate_prompt(prompt: str) -> str:
    if not prompt or not prompt.strip():
        raise ValidationError("Prompt is required", field="prompt")
    if len(prompt) > settings.MAX_PROMPT_LENGTH:
        raise ValidationError(
            f"Prompt is too long (max {settings.MAX_PROMPT_LENGTH} characters)",
            field="prompt"
        )
    return prompt


def _parse_ideation(data, required: bool = True):
    if not data or not data.get("projectName"):
        if required:
            raise ValidationError("Valid ideation is required", field="ideation")
        return None
    try:
        return Ideation.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid ideation: {e.error_count()} error(s)", field="ideation") from e


@router.get("/health")
async def ai_health():
    """Health check for the AI service"""
    return {
        "success": True,
        "status": "AI service is running",
        "ai_enabled": settings.AI_ENABLED,
        "timestamp": datetime.utcnow().isoformat()
    }


@router.post("/ideation")
@ai_rate_limit()
async def generate_ideation(request: Request, body: IdeationRequest):
    """Generate a project ideation from a free-form prompt"""
    prompt = _validate_prompt(body.prompt)
    logger.info(f"[AI API] Generating ideation for: {prompt[:50]}...")

    ideation = await ideation_agent.generate(prompt)
    return {"success": True, "data": ideation.model_dump(by_alias=True)}


@router.post("/generate-code")
@ai_rate_limit()
async def generate_code(request: Request, body: GenerateCodeRequest):
    """
    Generate the project file tree for an ideation

    On model or parse failure the response is a 500 carrying fallback=true so
    the client can fall back to the default skeleton.
    """
    ideation = _parse_ideation(body.ideation)
    logger.info(f"[AI API] Generating code for: {ideation.project_name}")

    try:
        tree = await coder_agent.generate(ideation, body.prompt)
    except (AIServiceError, MalformedInputError) as e:
        logger.log_error_with_context(e, context="generate-code")
        return JSONResponse(
            status_code=500,
            content={**error_response(e), "fallback": True}
        )

    return {"success": True, "data": egest(tree)}


@router.post("/generate-docs")
@ai_rate_limit()
async def generate_docs(request: Request, body: GenerateDocsRequest):
    """Render documentation and return it with the docs/ folder added to the tree"""
    if body.file_tree is None:
        raise ValidationError("file_tree is required", field="file_tree")

    tree = ingest(body.file_tree)
    ideation = _parse_ideation(body.ideation, required=False)
    documentation = documentation_agent.generate(ideation, tree)
    updated = documentation_agent.add_documentation_to_tree(tree, documentation)

    return {
        "success": True,
        "data": {
            "documentation": DocumentationResponse(**documentation.to_dict()).model_dump(),
            "file_tree": egest(updated),
        }
    }


@router.post("/generate-tests")
@ai_rate_limit()
async def generate_tests(request: Request, body: GenerateTestsRequest):
    """Generate a Jest test suite for the tree"""
    tree = ingest(body.file_tree)
    suite = tester_agent.generate(tree)
    return {
        "success": True,
        "data": GeneratedSuiteResponse.model_validate(suite.to_dict()).model_dump()
    }


@router.post("/workflow")
@ai_rate_limit()
async def run_workflow(request: Request, body: WorkflowRequest):
    """Run ideation → code → (tests) → documentation in one call"""
    prompt = _validate_prompt(body.prompt)
    run = await orchestrator.execute_workflow(prompt, include_tests=body.include_tests)

    return {
        "success": True,
        "data": {
            "workflow_id": run.id,
            "status": run.status.value,
            "duration_ms": round(run.duration_ms, 2),
            "steps": [step.to_dict() for step in run.steps],
            "ideation": run.ideation.model_dump(by_alias=True),
            "file_tree": egest(run.file_tree),
            "documentation": run.documentation.to_dict(),
            "test_suite": run.test_suite.to_dict() if run.test_suite else None,
        }
    }
