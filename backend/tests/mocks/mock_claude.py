"""
Mock Claude Client for Testing
Provides mock responses without calling the actual API
"""
from typing import Optional, Dict, Any, List
import json


MOCK_IDEATION = {
    'projectName': 'TaskFlow',
    'description': 'A focused todo app for small teams.',
    'features': ['Task lists with drag and drop', 'Due date reminders'],
    'techStack': {
        'frontend': ['React', 'Tailwind CSS'],
        'backend': ['Node.js', 'Express'],
        'database': ['MongoDB'],
        'other': []
    },
    'colorScheme': {
        'primary': '#6366f1',
        'secondary': '#8b5cf6',
        'accent': '#ec4899',
        'background': '#ffffff',
        'text': '#1f2937'
    },
    'styleGuidelines': {'layout': 'Clean and minimal'},
    'userFlow': ['Sign in', 'Create a list', 'Add tasks'],
    'targetAudience': 'Small teams',
    'uniqueSellingPoint': 'Zero-setup collaboration'
}

MOCK_FILE_TREE = {
    'name': 'project-root',
    'type': 'folder',
    'children': [
        {
            'name': 'src',
            'type': 'folder',
            'children': [
                {
                    'name': 'App.jsx',
                    'type': 'file',
                    'content': "function App() {\n  return <h1>TaskFlow</h1>;\n}\n\nexport default App;"
                },
                {'name': 'index.css', 'type': 'file', 'content': 'body { margin: 0; }'}
            ]
        },
        {'name': 'package.json', 'type': 'file', 'content': '{"name": "taskflow"}'}
    ]
}


class MockClaudeClient:
    """Mock Claude client that returns predefined responses"""

    def __init__(self):
        self.call_count = 0
        self.last_prompt = None
        self.last_system = None
        self.last_model = None
        self.calls: List[Dict[str, Any]] = []
        self.responses = {}
        self.error: Optional[Exception] = None

    def set_response(self, key: str, response: str):
        """Set a custom response for prompts containing key"""
        self.responses[key] = response

    def set_error(self, error: Exception):
        """Make every following call raise error"""
        self.error = error

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        model: str = 'haiku',
        max_tokens: int = 4096,
        temperature: float = 0.7,
        messages: Optional[List[Dict[str, str]]] = None
    ) -> Dict[str, Any]:
        """Mock generate method, shaped like ClaudeClient.generate"""
        self.call_count += 1
        self.last_prompt = prompt
        self.last_system = system_prompt
        self.last_model = model
        self.calls.append({'prompt': prompt, 'model': model, 'max_tokens': max_tokens})

        if self.error is not None:
            raise self.error

        return {
            'content': self._content_for(prompt),
            'model': model,
            'input_tokens': 10,
            'output_tokens': 20,
            'total_tokens': 30,
            'stop_reason': 'end_turn',
            'id': f'msg_mock_{self.call_count}'
        }

    def _content_for(self, prompt: str) -> str:
        for key, response in self.responses.items():
            if key.lower() in prompt.lower():
                return response

        if 'ideation plan' in prompt.lower():
            return json.dumps(MOCK_IDEATION)
        if 'file structure' in prompt.lower():
            # Fenced on purpose, like real model output
            return '```json\n' + json.dumps(MOCK_FILE_TREE, indent=2) + '\n```'
        return 'Mock response from Claude'

    def reset(self):
        """Reset mock state"""
        self.call_count = 0
        self.last_prompt = None
        self.last_system = None
        self.last_model = None
        self.calls = []
        self.responses = {}
        self.error = None
