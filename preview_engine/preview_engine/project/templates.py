"""Starter file sets used when a project is created without files."""

from __future__ import annotations

import json
import logging

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "react-vite"
FALLBACK_TEMPLATE = "vanilla-js"

_REACT_PACKAGE = {
    "name": "livepreview-project",
    "type": "module",
    "scripts": {
        "dev": "vite --host 0.0.0.0 --port 3000",
        "build": "vite build",
        "preview": "vite preview --host 0.0.0.0 --port 3000",
    },
    "dependencies": {"react": "^18.3.1", "react-dom": "^18.3.1"},
    "devDependencies": {"@vitejs/plugin-react": "^4.3.1", "vite": "^5.4.0"},
}

_TEMPLATES: dict[str, dict[str, str]] = {
    "react-vite": {
        "package.json": json.dumps(_REACT_PACKAGE, indent=2),
        "vite.config.js": (
            "import { defineConfig } from 'vite'\n"
            "import react from '@vitejs/plugin-react'\n"
            "\n"
            "export default defineConfig({\n"
            "  plugins: [react()],\n"
            "})\n"
        ),
        "index.html": (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            "  <head>\n"
            '    <meta charset="UTF-8" />\n'
            '    <meta name="viewport" content="width=device-width, initial-scale=1.0" />\n'
            "    <title>Live Preview Project</title>\n"
            "  </head>\n"
            "  <body>\n"
            '    <div id="root"></div>\n'
            '    <script type="module" src="/src/main.jsx"></script>\n'
            "  </body>\n"
            "</html>\n"
        ),
        "src/main.jsx": (
            "import React from 'react'\n"
            "import ReactDOM from 'react-dom/client'\n"
            "import App from './App'\n"
            "import './index.css'\n"
            "\n"
            "ReactDOM.createRoot(document.getElementById('root')).render(\n"
            "  <React.StrictMode>\n"
            "    <App />\n"
            "  </React.StrictMode>\n"
            ")\n"
        ),
        "src/App.jsx": (
            "import { useState } from 'react'\n"
            "\n"
            "function App() {\n"
            "  const [count, setCount] = useState(0)\n"
            "\n"
            "  return (\n"
            "    <div style={{ padding: '2rem', fontFamily: 'system-ui' }}>\n"
            "      <h1>Live preview</h1>\n"
            "      <p>Edit src/App.jsx to see changes.</p>\n"
            "      <button onClick={() => setCount(c => c + 1)}>\n"
            "        Count: {count}\n"
            "      </button>\n"
            "    </div>\n"
            "  )\n"
            "}\n"
            "\n"
            "export default App\n"
        ),
        "src/index.css": (
            "* {\n  margin: 0;\n  padding: 0;\n  box-sizing: border-box;\n}\n"
            "\n"
            "body {\n  min-height: 100vh;\n  background: #1a1a2e;\n  color: white;\n}\n"
        ),
    },
    "vanilla-js": {
        "index.html": (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            "<head>\n"
            '  <meta charset="UTF-8">\n'
            '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
            "  <title>Live Preview Project</title>\n"
            '  <link rel="stylesheet" href="style.css">\n'
            "</head>\n"
            "<body>\n"
            '  <div class="container">\n'
            "    <h1>Live preview</h1>\n"
            '    <button id="counter">Click me: 0</button>\n'
            "  </div>\n"
            '  <script src="script.js"></script>\n'
            "</body>\n"
            "</html>\n"
        ),
        "style.css": (
            "body {\n  min-height: 100vh;\n  display: flex;\n  align-items: center;\n"
            "  justify-content: center;\n  font-family: system-ui;\n}\n"
            "\n"
            ".container {\n  text-align: center;\n}\n"
        ),
        "script.js": (
            "let count = 0;\n"
            "const button = document.getElementById('counter');\n"
            "\n"
            "button.addEventListener('click', () => {\n"
            "  count++;\n"
            "  button.textContent = `Click me: ${count}`;\n"
            "});\n"
        ),
    },
}


def available_templates() -> list[str]:
    return sorted(_TEMPLATES)


def resolve_template(name: str | None = None) -> str:
    """Map a requested template name to one that exists.

    ``None`` selects the default template; unknown names fall back to the
    vanilla-js set.
    """
    template = name or DEFAULT_TEMPLATE
    if template not in _TEMPLATES:
        logger.info("Unknown template %r, using %s", template, FALLBACK_TEMPLATE)
        return FALLBACK_TEMPLATE
    return template


def template_files(name: str | None = None) -> dict[str, str]:
    """Return a fresh copy of the starter files for *name*."""
    return dict(_TEMPLATES[resolve_template(name)])
