from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, List, Any


class TechStack(BaseModel):
    frontend: List[str] = Field(default_factory=list)
    backend: List[str] = Field(default_factory=list)
    database: List[str] = Field(default_factory=list)
    other: List[str] = Field(default_factory=list)


class ColorScheme(BaseModel):
    primary: str = "#6366f1"
    secondary: str = "#8b5cf6"
    accent: str = "#ec4899"
    background: str = "#ffffff"
    text: str = "#1f2937"
    description: Optional[str] = None


class StyleGuidelines(BaseModel):
    layout: Optional[str] = None
    typography: Optional[str] = None
    iconography: Optional[str] = None
    animation: Optional[str] = None


class Ideation(BaseModel):
    """Project ideation produced from the user's prompt (camelCase on the wire)"""
    project_name: str = Field(..., min_length=1, alias="projectName")
    description: str = ""
    features: List[str] = Field(default_factory=list)
    tech_stack: TechStack = Field(default_factory=TechStack, alias="techStack")
    color_scheme: ColorScheme = Field(default_factory=ColorScheme, alias="colorScheme")
    style_guidelines: StyleGuidelines = Field(default_factory=StyleGuidelines, alias="styleGuidelines")
    user_flow: List[str] = Field(default_factory=list, alias="userFlow")
    target_audience: str = Field("", alias="targetAudience")
    unique_selling_point: str = Field("", alias="uniqueSellingPoint")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class IdeationRequest(BaseModel):
    prompt: str = ""


class GenerateCodeRequest(BaseModel):
    ideation: Optional[Dict[str, Any]] = None
    prompt: str = ""


class GenerateDocsRequest(BaseModel):
    ideation: Optional[Dict[str, Any]] = None
    file_tree: Optional[Dict[str, Any]] = None


class WorkflowRequest(BaseModel):
    prompt: str = ""
    include_tests: bool = False


class GenerateTestsRequest(BaseModel):
    file_tree: Dict[str, Any]


class DocumentationResponse(BaseModel):
    readme: str
    api_docs: str
    component_docs: str
    setup_guide: str
    changelog: str


class GeneratedSuiteSummary(BaseModel):
    total_tests: int
    components: int
    utilities: int
    hooks: int
    estimated_coverage: int
    pass_rate: int


class CodeQualityMetrics(BaseModel):
    code_quality: int
    total_files: int
    total_lines: int
    maintainability_index: int
    cyclomatic_complexity: int


class GeneratedSuiteResponse(BaseModel):
    summary: GeneratedSuiteSummary
    tests: Dict[str, str]
    config: Dict[str, str]
    code_quality: CodeQualityMetrics
