from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
import time

from app.utils.claude_client import claude_client
from app.core.logging_config import logger


@dataclass
class AgentContext:
    """
    What an agent receives when run through process().

    user_request is the original prompt; metadata carries the outputs of the
    agents that ran before (ideation, file_tree, ...).
    """
    user_request: str
    project_id: str = ""
    metadata: Optional[Dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}


class BaseAgent(ABC):
    """
    Common shape of ScaffoldAI agents.

    Model-backed agents (ideation, coder) go through _call_claude; the
    template-driven ones (documentation, tester) never touch self.claude.
    """

    def __init__(
        self,
        name: str,
        role: str,
        capabilities: List[str],
        model: str = "haiku"
    ):
        self.name = name
        self.role = role
        self.capabilities = capabilities
        self.model = model
        self.claude = claude_client

    @abstractmethod
    async def process(self, context: AgentContext) -> Dict[str, Any]:
        """Run the agent on a workflow context and return its outputs by key"""

    async def _call_claude(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 4096,
        temperature: float = 0.7
    ) -> str:
        """
        Send one prompt with this agent's model and return the reply text

        Raises:
            AIServiceError: propagated from the client
        """
        started = time.perf_counter()
        try:
            response = await self.claude.generate(
                prompt=user_prompt,
                system_prompt=system_prompt,
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature
            )
        except Exception as e:
            logger.error(f"[{self.name}] Claude call failed: {e}")
            raise

        logger.log_agent_event(
            self.name,
            "response received",
            tokens_used=response.get("total_tokens", 0),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response.get("content", "")

    def get_info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "role": self.role,
            "capabilities": self.capabilities,
            "model": self.model
        }
