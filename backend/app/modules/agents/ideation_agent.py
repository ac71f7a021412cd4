"""
Ideation Agent
Turns a free-form prompt into a structured project ideation
"""

from typing import Dict, Any

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import AIResponseParseError
from app.core.logging_config import logger
from app.modules.agents.base_agent import BaseAgent, AgentContext
from app.schemas.ai import Ideation
from app.utils.response_parser import json_parser


class IdeationAgent(BaseAgent):
    """Product ideation specialist"""

    SYSTEM_PROMPT = """You are a product ideation specialist.
Turn the user's idea into a concise, buildable project plan.
Return ONLY valid JSON (no markdown, no explanations, no code blocks)."""

    USER_PROMPT_TEMPLATE = """Create a detailed project ideation plan for this request.

User Prompt: "{prompt}"

EXACT FORMAT:
{{
  "projectName": "A catchy name for the project",
  "description": "2-3 sentence description of what the project does",
  "features": ["Feature 1 with brief description", "Feature 2 with brief description"],
  "techStack": {{
    "frontend": ["React", "Tailwind CSS"],
    "backend": ["Node.js", "Express"],
    "database": ["MongoDB"],
    "other": []
  }},
  "colorScheme": {{
    "primary": "#6366f1",
    "secondary": "#8b5cf6",
    "accent": "#ec4899",
    "background": "#ffffff",
    "text": "#1f2937",
    "description": "Modern and professional"
  }},
  "styleGuidelines": {{
    "layout": "Clean and minimal",
    "typography": "Inter font family",
    "iconography": "Line icons",
    "animation": "Subtle transitions"
  }},
  "userFlow": ["Step 1", "Step 2", "Step 3"],
  "targetAudience": "Who is this app for",
  "uniqueSellingPoint": "What makes this project special"
}}"""

    def __init__(self):
        super().__init__(
            name="IdeationAgent",
            role="Product Ideation Specialist",
            capabilities=["project_naming", "feature_planning", "tech_stack_selection"],
            model="haiku"
        )

    async def generate(self, prompt: str) -> Ideation:
        """
        Generate a validated ideation for a prompt

        Raises:
            AIServiceError: the model call failed
            AIResponseParseError: the response is not a usable ideation object
        """
        logger.log_agent_event(self.name, "generating ideation")
        content = await self._call_claude(
            system_prompt=self.SYSTEM_PROMPT,
            user_prompt=self.USER_PROMPT_TEMPLATE.format(prompt=prompt),
            max_tokens=2048,
            temperature=0.7
        )
        data = json_parser.parse_object(content)
        try:
            return Ideation.model_validate(data)
        except PydanticValidationError as e:
            raise AIResponseParseError(
                f"AI ideation is missing required fields: {e.error_count()} error(s)"
            ) from e

    async def process(self, context: AgentContext) -> Dict[str, Any]:
        ideation = await self.generate(context.user_request)
        return {"ideation": ideation}


ideation_agent = IdeationAgent()
