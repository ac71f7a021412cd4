"""
Coder Agent
Generates the project's file tree from an ideation
"""

import json
from typing import Dict, Any

from app.core.config import settings
from app.core.logging_config import logger
from app.modules.agents.base_agent import BaseAgent, AgentContext
from app.modules.filetree import Node, count_files, ingest
from app.schemas.ai import Ideation
from app.utils.response_parser import json_parser


class CoderAgent(BaseAgent):
    """Writes a complete React application as a JSON file tree"""

    SYSTEM_PROMPT = """You are an expert React developer.
Generate complete, runnable project files.
Return ONLY valid JSON describing the file tree."""

    USER_PROMPT_TEMPLATE = """Generate a complete React application file structure based on this ideation:

{ideation}

Original user request: "{prompt}"

Requirements:
1. Return ONLY valid JSON
2. Create a functional React app with working features
3. Include complete, runnable code in each file
4. Use modern React patterns (hooks, functional components)
5. Style with Tailwind CSS inline classes
6. The main component must live at src/App.jsx

Return format:
{{
  "name": "{root_name}",
  "type": "folder",
  "children": [
    {{
      "name": "src",
      "type": "folder",
      "children": [
        {{"name": "App.jsx", "type": "file", "content": "// Complete working React component code here"}}
      ]
    }}
  ]
}}"""

    def __init__(self):
        super().__init__(
            name="CoderAgent",
            role="React Code Generator",
            capabilities=["code_generation", "project_structure"],
            model="sonnet"
        )

    async def generate(self, ideation: Ideation, prompt: str = "") -> Node:
        """
        Generate and validate a file tree for an ideation

        Raises:
            AIServiceError: the model call failed
            MalformedInputError: the response is not a valid tree document
        """
        logger.log_agent_event(self.name, f"generating code for {ideation.project_name}")
        content = await self._call_claude(
            system_prompt=self.SYSTEM_PROMPT,
            user_prompt=self.USER_PROMPT_TEMPLATE.format(
                ideation=json.dumps(ideation.model_dump(by_alias=True), indent=2),
                prompt=prompt,
                root_name=settings.DEFAULT_ROOT_NAME
            ),
            max_tokens=settings.CLAUDE_CODE_MAX_TOKENS,
            temperature=0.8
        )
        tree = ingest(json_parser.parse_object(content))
        logger.log_agent_event(self.name, f"generated {count_files(tree)} files")
        return tree

    async def process(self, context: AgentContext) -> Dict[str, Any]:
        ideation = context.metadata.get("ideation")
        if ideation is None:
            raise ValueError("CoderAgent requires an ideation in the context metadata")
        tree = await self.generate(ideation, context.user_request)
        return {"file_tree": tree}


coder_agent = CoderAgent()
