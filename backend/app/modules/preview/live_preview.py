"""
Live preview builder

Turns a project tree into a standalone HTML page that renders the project's
App component in the browser using React 18 UMD builds, Babel standalone and
the Tailwind CDN.
"""

import re
from dataclasses import dataclass
from string import Template
from typing import Mapping

from app.modules.filetree import Node, flatten, resolve_entry_file


STYLE_PATHS = {
    "index": ("src/index.css", "project-root/src/index.css"),
    "app": ("src/App.css", "project-root/src/App.css"),
}

# Applied in order to the entry component source
_CLEANUP_PATTERNS = [
    re.compile(r"import\s+[\s\S]*?from\s+['\"][^'\"]+['\"];?\s*"),
    re.compile(r"import\s+['\"][^'\"]+['\"];?\s*"),
    re.compile(r"export\s+default\s+\w+;?\s*"),
    re.compile(r"export\s+{[^}]*};?\s*"),
    re.compile(r"const\s+{\s*useState[^}]*}\s*=\s*React;?\s*"),
]

PREVIEW_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Live Preview</title>
  <script crossorigin src="https://unpkg.com/react@18/umd/react.development.js"></script>
  <script crossorigin src="https://unpkg.com/react-dom@18/umd/react-dom.development.js"></script>
  <script src="https://unpkg.com/@babel/standalone/babel.min.js"></script>
  <script src="https://cdn.tailwindcss.com"></script>
  <style>
    * {
      margin: 0;
      padding: 0;
      box-sizing: border-box;
    }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', 'Oxygen',
        'Ubuntu', 'Cantarell', 'Fira Sans', 'Droid Sans', 'Helvetica Neue',
        sans-serif;
      -webkit-font-smoothing: antialiased;
      -moz-osx-font-smoothing: grayscale;
    }
    #root {
      min-height: 100vh;
    }
    $index_css
    $app_css
  </style>
</head>
<body>
  <div id="root"></div>

  <script type="text/babel" data-type="module">
    const { useState, useEffect, useRef, useCallback, useMemo, useReducer, useContext, createContext } = React;

    $component_code

    const rootElement = document.getElementById('root');
    if (rootElement) {
      try {
        const root = ReactDOM.createRoot(rootElement);
        root.render(React.createElement(App, null));
      } catch (err) {
        console.error('Error mounting App:', err);
        rootElement.innerHTML = `
          <div style="padding: 40px; font-family: monospace; background: #fee; border-left: 4px solid #f44; margin: 20px;">
            <h3 style="color: #c00; margin-bottom: 10px;">⚠️ Preview Error</h3>
            <p style="color: #600; margin-bottom: 10px;">$${err.message}</p>
            <pre style="background: #fff; padding: 10px; overflow: auto; font-size: 12px;">$${err.stack}</pre>
          </div>
        `;
      }
    }
  </script>

  <script>
    window.addEventListener('error', function(event) {
      console.error('Preview Runtime Error:', event.error);
      const rootElement = document.getElementById('root');
      if (rootElement && !rootElement.innerHTML) {
        rootElement.innerHTML = `
          <div style="padding: 40px; font-family: monospace; background: #fee; border-left: 4px solid #f44; margin: 20px;">
            <h3 style="color: #c00; margin-bottom: 10px;">⚠️ Runtime Error</h3>
            <p style="color: #600;">$${event.error.message}</p>
          </div>
        `;
      }
    });
  </script>
</body>
</html>""")


@dataclass(frozen=True)
class PreviewDocument:
    html: str
    entry_path: str


def clean_component_code(source: str) -> str:
    """Strip module syntax the in-browser Babel runtime cannot resolve"""
    for pattern in _CLEANUP_PATTERNS:
        source = pattern.sub("", source)
    return source


def _first_style(files: Mapping[str, str], candidates) -> str:
    for path in candidates:
        if files.get(path):
            return files[path]
    return ""


def build_preview(tree: Node) -> PreviewDocument:
    """
    Render the preview page for a project tree

    Raises:
        NoEntryFileFoundError: the tree has no App.jsx / App.js
    """
    files = flatten(tree)
    entry = resolve_entry_file(files)

    html = PREVIEW_TEMPLATE.substitute(
        index_css=_first_style(files, STYLE_PATHS["index"]),
        app_css=_first_style(files, STYLE_PATHS["app"]),
        component_code=clean_component_code(entry.content),
    )
    return PreviewDocument(html=html, entry_path=entry.path)
