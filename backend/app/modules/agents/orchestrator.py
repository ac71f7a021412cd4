"""
Multi-Agent Orchestrator
Runs ideation, code generation, optional testing and documentation in sequence
"""

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any, AsyncGenerator

from app.core.logging_config import logger
from app.modules.agents.base_agent import AgentContext
from app.modules.agents.coder_agent import coder_agent
from app.modules.agents.documentation_agent import Documentation, documentation_agent
from app.modules.agents.ideation_agent import ideation_agent
from app.modules.agents.tester_agent import GeneratedTestSuite, tester_agent
from app.modules.filetree import Node
from app.schemas.ai import Ideation


class StepStatus(str, Enum):
    """Workflow and step states"""
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class WorkflowStep:
    agent: str
    status: StepStatus = StepStatus.RUNNING
    started_at: datetime = field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent": self.agent,
            "status": self.status.value,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "error": self.error,
        }


@dataclass
class WorkflowRun:
    """State of one workflow execution plus everything the agents produced"""
    prompt: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    status: StepStatus = StepStatus.RUNNING
    steps: List[WorkflowStep] = field(default_factory=list)
    duration_ms: float = 0.0
    error: Optional[str] = None
    ideation: Optional[Ideation] = None
    file_tree: Optional[Node] = None
    test_suite: Optional[GeneratedTestSuite] = None
    documentation: Optional[Documentation] = None

    def outputs(self) -> Dict[str, Any]:
        """Agent outputs so far, passed on as the next agent's context metadata"""
        return {
            key: value
            for key, value in (
                ("ideation", self.ideation),
                ("file_tree", self.file_tree),
                ("test_suite", self.test_suite),
                ("documentation", self.documentation),
            )
            if value is not None
        }


class WorkflowOrchestrator:
    """
    Multi-Agent Orchestrator

    Responsibilities:
    - Run agents in order: ideation → coder → tester (optional) → documentation
    - Pass each agent's output to the next one
    - Record a WorkflowStep per agent with status and timestamps
    - Stream progress events to the caller
    """

    def __init__(self):
        self.agents = {
            "ideation": ideation_agent,
            "coder": coder_agent,
            "tester": tester_agent,
            "documentation": documentation_agent,
        }

    def _get_agent_sequence(self, include_tests: bool) -> List[str]:
        sequence = ["ideation", "coder"]
        if include_tests:
            sequence.append("tester")
        sequence.append("documentation")
        return sequence

    async def _execute_agent(self, agent_name: str, run: WorkflowRun) -> None:
        """Run one agent's process() on the outputs so far and merge its results into the run"""
        agent = self.agents.get(agent_name)
        if agent is None:
            raise ValueError(f"Unknown agent: {agent_name}")

        context = AgentContext(
            user_request=run.prompt,
            project_id=run.id,
            metadata=run.outputs(),
        )
        result = await agent.process(context)

        for key, value in result.items():
            setattr(run, key, value)
        logger.log_agent_event(agent_name, "step completed", outputs=sorted(result))

    async def stream_workflow(
        self,
        prompt: str,
        include_tests: bool = False,
        run: Optional[WorkflowRun] = None
    ) -> AsyncGenerator[Dict[str, Any], None]:
        """
        Execute the workflow, yielding a progress event around every agent

        A failing agent marks its step and the run as failed, yields an
        agent_error event and re-raises.
        """
        run = run or WorkflowRun(prompt=prompt)
        start = time.perf_counter()
        logger.info(f"[Orchestrator] Starting workflow {run.id} (tests={include_tests})")

        for agent_name in self._get_agent_sequence(include_tests):
            step = WorkflowStep(agent=agent_name)
            run.steps.append(step)
            yield {
                "type": "agent_start",
                "agent": agent_name,
                "status": f"Starting {agent_name}...",
                "timestamp": step.started_at.isoformat()
            }

            try:
                await self._execute_agent(agent_name, run)
            except Exception as e:
                step.status = StepStatus.FAILED
                step.completed_at = datetime.utcnow()
                step.error = str(e)
                run.status = StepStatus.FAILED
                run.error = str(e)
                run.duration_ms = (time.perf_counter() - start) * 1000
                logger.error(f"[Orchestrator] Error in {agent_name}: {e}")
                yield {
                    "type": "agent_error",
                    "agent": agent_name,
                    "error": str(e),
                    "timestamp": step.completed_at.isoformat()
                }
                raise

            step.status = StepStatus.COMPLETED
            step.completed_at = datetime.utcnow()
            yield {
                "type": "agent_complete",
                "agent": agent_name,
                "status": f"Completed {agent_name}",
                "timestamp": step.completed_at.isoformat()
            }

        run.status = StepStatus.COMPLETED
        run.duration_ms = (time.perf_counter() - start) * 1000
        logger.log_performance("workflow", run.duration_ms, threshold_ms=120000, workflow_id=run.id)
        yield {
            "type": "workflow_complete",
            "status": "All agents completed successfully",
            "workflow_id": run.id,
            "timestamp": datetime.utcnow().isoformat()
        }

    async def execute_workflow(self, prompt: str, include_tests: bool = False) -> WorkflowRun:
        """Run the whole workflow and return the finished run"""
        run = WorkflowRun(prompt=prompt)
        async for _ in self.stream_workflow(prompt, include_tests, run=run):
            pass
        return run

    def list_agents(self) -> List[Dict]:
        """List all available agents and their capabilities"""
        return [
            {"key": name, **agent.get_info()}
            for name, agent in self.agents.items()
        ]


# Singleton instance
orchestrator = WorkflowOrchestrator()
