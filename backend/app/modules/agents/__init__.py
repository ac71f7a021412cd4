"""
Multi-Agent System for ScaffoldAI
"""

from app.modules.agents.base_agent import BaseAgent, AgentContext
from app.modules.agents.ideation_agent import ideation_agent, IdeationAgent
from app.modules.agents.coder_agent import coder_agent, CoderAgent
from app.modules.agents.documentation_agent import documentation_agent, DocumentationAgent, Documentation
from app.modules.agents.tester_agent import (
    tester_agent,
    TesterAgent,
    GeneratedTest,
    GeneratedTestSuite,
    GenerationProgress,
)
from app.modules.agents.orchestrator import (
    orchestrator,
    WorkflowOrchestrator,
    WorkflowRun,
    WorkflowStep,
    StepStatus,
)

__all__ = [
    # Base classes
    'BaseAgent',
    'AgentContext',

    # Singleton instances
    'ideation_agent',
    'coder_agent',
    'documentation_agent',
    'tester_agent',
    'orchestrator',

    # Classes
    'IdeationAgent',
    'CoderAgent',
    'DocumentationAgent',
    'TesterAgent',
    'WorkflowOrchestrator',

    # Results
    'Documentation',
    'GeneratedTest',
    'GeneratedTestSuite',
    'GenerationProgress',
    'WorkflowRun',
    'WorkflowStep',
    'StepStatus',
]
