"""
ScaffoldAI - Test Configuration and Fixtures
"""
import os
import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Make the backend package importable when running from the repository root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['ANTHROPIC_API_KEY'] = 'test-api-key'
os.environ['CLAUDE_MAX_RETRIES'] = '0'

from app.main import app
from app.modules.filetree import FileNode, FolderNode, default_skeleton, egest

from tests.mocks.mock_claude import MockClaudeClient


APP_JSX = """import React, { useState, useEffect } from 'react';
import './App.css';

function App(props) {
  const [count, setCount] = useState(0);
  useEffect(() => { document.title = props.title; }, []);
  return <div className="p-4">{count}</div>;
}

export default App;"""


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the ASGI app"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac


@pytest.fixture
def mock_claude() -> MockClaudeClient:
    return MockClaudeClient()


@pytest.fixture
def patched_agents(mock_claude: MockClaudeClient):
    """Point every agent singleton at the mock client for the duration of a test"""
    from app.modules.agents import coder_agent, ideation_agent

    originals = (ideation_agent.claude, coder_agent.claude)
    ideation_agent.claude = mock_claude
    coder_agent.claude = mock_claude
    yield mock_claude
    ideation_agent.claude, coder_agent.claude = originals


@pytest.fixture
def sample_tree() -> FolderNode:
    """A small React project with a component, a utility, a hook and CSS"""
    return FolderNode(
        name='project-root',
        children=[
            FolderNode(
                name='src',
                children=[
                    FileNode(name='App.jsx', content=APP_JSX),
                    FileNode(name='App.css', content='.app { color: red; }'),
                    FileNode(name='index.css', content='body { margin: 0; }'),
                    FolderNode(
                        name='components',
                        children=[
                            FileNode(
                                name='Button.jsx',
                                content='export default function Button() {\n  return <button />;\n}'
                            ),
                        ]
                    ),
                    FolderNode(
                        name='utils',
                        children=[
                            FileNode(
                                name='format.js',
                                content='export const format = (v) => String(v);'
                            ),
                        ]
                    ),
                    FolderNode(
                        name='hooks',
                        children=[
                            FileNode(name='useToggle.js', content='export default function useToggle() {}'),
                        ]
                    ),
                ]
            ),
            FileNode(name='README.md', content='# Sample\n'),
            FileNode(name='empty.txt', content=''),
        ]
    )


@pytest.fixture
def sample_document(sample_tree: FolderNode) -> dict:
    return egest(sample_tree)


@pytest.fixture
def skeleton() -> FolderNode:
    return default_skeleton()
