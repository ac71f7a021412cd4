"""
Documentation Agent
Builds project documentation from the ideation and the file tree.

No model call is involved: every document is rendered from templates, so
documentation is available even when the AI service is not configured.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional

from app.core.logging_config import logger
from app.modules.agents.base_agent import BaseAgent, AgentContext
from app.modules.filetree import (
    CollectedFile,
    FileNode,
    FolderNode,
    Node,
    collect_by_predicate,
    replace_subtree,
)
from app.modules.filetree.predicates import is_documented_component, strip_extension
from app.schemas.ai import Ideation


DOCS_FOLDER = "docs"


@dataclass
class Documentation:
    readme: str
    api_docs: str
    component_docs: str
    setup_guide: str
    changelog: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


README_TEMPLATE = """# {project_name}

{description}

## ✨ Features

{features}

## 🚀 Quick Start

```bash
npm install
npm start
```

Visit http://localhost:3000

## 📋 Requirements

- Node.js 14+
- npm or yarn

## 🛠️ Tech Stack

**Frontend:** {frontend}
**Backend:** {backend}
{database}
## 🎨 Design System

- Primary Color: {primary}
- Secondary Color: {secondary}
- Accent Color: {accent}

## 🎯 Target Audience

{target_audience}

## 💡 Unique Selling Point

{unique_selling_point}

## 📝 User Flow

{user_flow}

---

Generated with ScaffoldAI ✨"""

API_DOCS = """# API Documentation

## Overview

This document describes all available API endpoints and functions.

## Core Functions

### useState

State management hook for React components.

```javascript
const [state, setState] = useState(initialValue);
```

### useEffect

Side effects management.

```javascript
useEffect(() => {
  // Effect logic
}, [dependencies]);
```

## Available Endpoints

### GET /api/health

Check backend health status.

**Response:**
```json
{
  "status": "ok",
  "timestamp": "2024-01-01T00:00:00Z"
}
```

---

For more information, check the README."""

COMPONENT_SECTION_TEMPLATE = """
### {name}

**Location:** `{path}`

**Description:** Component for {stem}

**Props:**
- Standard React props supported

**Example:**
```jsx
import {name} from '{path}';

<{name} prop="value" />
```

**Usage:**
Add this component to your templates and customize as needed.

---
"""

COMPONENT_DOCS_TEMPLATE = """# Component Documentation

## Overview

This section documents all React components in the project.

{sections}

## Best Practices

1. Keep components small and focused
2. Use proper PropTypes validation
3. Memoize expensive computations
4. Write meaningful JSDoc comments"""

SETUP_GUIDE = """# Setup Guide

## Installation

### Prerequisites
- Node.js 14 or higher
- npm or yarn package manager

### Step 1: Install Dependencies

```bash
npm install
```

### Step 2: Start Development Server

```bash
npm start
```

The app will open at http://localhost:3000

## Running Tests

```bash
npm test
```

## Building for Production

```bash
npm run build
```

## Troubleshooting

### Port Already in Use

If port 3000 is taken:
```bash
PORT=3001 npm start
```

### Module Not Found

Clear node_modules and reinstall:
```bash
rm -rf node_modules package-lock.json
npm install
```"""

CHANGELOG_TEMPLATE = """# Changelog

## Version 1.0.0 - Initial Release

### Features
{features}

### Tech Stack
- Frontend: {frontend}
- Backend: {backend}

### Initial Setup
- Project structure created
- Dependencies configured
- Development environment ready

### Known Issues
None at this time

---

For updates and future releases, check this changelog."""


class DocumentationAgent(BaseAgent):
    """Renders README, API, component, setup and changelog documents"""

    def __init__(self):
        super().__init__(
            name="DocumentationAgent",
            role="Technical Writer",
            capabilities=["readme", "component_docs", "setup_guide", "changelog"],
        )

    def extract_components(self, tree: Node) -> List[CollectedFile]:
        return collect_by_predicate(tree, is_documented_component)

    def generate_readme(self, ideation: Ideation) -> str:
        features = "\n".join(
            f"- **{feature.split(' ')[0]}** - {feature}" for feature in ideation.features
        )
        database = ideation.tech_stack.database
        return README_TEMPLATE.format(
            project_name=ideation.project_name,
            description=ideation.description,
            features=features,
            frontend=", ".join(ideation.tech_stack.frontend),
            backend=", ".join(ideation.tech_stack.backend),
            database=f"**Database:** {', '.join(database)}\n" if database else "",
            primary=ideation.color_scheme.primary,
            secondary=ideation.color_scheme.secondary,
            accent=ideation.color_scheme.accent,
            target_audience=ideation.target_audience,
            unique_selling_point=ideation.unique_selling_point,
            user_flow="\n".join(f"{i}. {step}" for i, step in enumerate(ideation.user_flow, 1)),
        )

    def generate_api_docs(self, tree: Node) -> str:
        return API_DOCS

    def generate_component_docs(self, tree: Node) -> str:
        sections = [
            COMPONENT_SECTION_TEMPLATE.format(
                name=strip_extension(component.name),
                path=component.path,
                stem=strip_extension(component.name),
            )
            for component in self.extract_components(tree)
        ]
        return COMPONENT_DOCS_TEMPLATE.format(sections="\n".join(sections))

    def generate_setup_guide(self, ideation: Ideation) -> str:
        return SETUP_GUIDE

    def generate_changelog(self, ideation: Ideation) -> str:
        return CHANGELOG_TEMPLATE.format(
            features="\n".join(f"- {feature}" for feature in ideation.features),
            frontend=", ".join(ideation.tech_stack.frontend),
            backend=", ".join(ideation.tech_stack.backend),
        )

    def generate(self, ideation: Optional[Ideation], tree: Node) -> Documentation:
        """Render every document for the project"""
        if ideation is None:
            ideation = Ideation(project_name="Project")

        documentation = Documentation(
            readme=self.generate_readme(ideation),
            api_docs=self.generate_api_docs(tree),
            component_docs=self.generate_component_docs(tree),
            setup_guide=self.generate_setup_guide(ideation),
            changelog=self.generate_changelog(ideation),
        )
        logger.log_agent_event(self.name, f"documentation generated for {ideation.project_name}")
        return documentation

    def add_documentation_to_tree(self, tree: Node, documentation: Documentation) -> Node:
        """Return a copy of tree with a root-level docs/ folder holding every document"""
        docs_folder = FolderNode(
            name=DOCS_FOLDER,
            children=[
                FileNode(name="README.md", content=documentation.readme),
                FileNode(name="API.md", content=documentation.api_docs),
                FileNode(name="COMPONENTS.md", content=documentation.component_docs),
                FileNode(name="SETUP.md", content=documentation.setup_guide),
                FileNode(name="CHANGELOG.md", content=documentation.changelog),
            ]
        )
        return replace_subtree(tree, f"{tree.name}/{DOCS_FOLDER}", docs_folder)

    async def process(self, context: AgentContext) -> Dict[str, Any]:
        tree = context.metadata["file_tree"]
        documentation = self.generate(context.metadata.get("ideation"), tree)
        return {
            "documentation": documentation,
            "file_tree": self.add_documentation_to_tree(tree, documentation),
        }


documentation_agent = DocumentationAgent()
