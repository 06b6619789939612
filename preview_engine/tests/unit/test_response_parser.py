"""Unit tests for preview_engine.ingest.response_parser."""

from __future__ import annotations

import pytest

from preview_engine.ingest.response_parser import detect_language, parse_project_files

_RESPONSE = """\
Here is your project.

// filename: src/App.jsx
```jsx
export default function App() {
  return <h1>Hi</h1>;
}
```

<!-- filename: index.html -->
```html
<div id="root"></div>
```

**`src/styles.css`**
```css
h1 { color: red; }
```

### src/util.js
```js
export const add = (a, b) => a + b;
```

```bash
npm install
```
"""


class TestParseProjectFiles:
    def test_all_marker_styles(self):
        files = parse_project_files(_RESPONSE)
        assert sorted(files) == ["index.html", "src/App.jsx", "src/styles.css", "src/util.js"]
        assert files["index.html"] == '<div id="root"></div>'
        assert files["src/styles.css"] == "h1 { color: red; }"

    def test_unmarked_blocks_ignored(self):
        assert "npm install" not in parse_project_files(_RESPONSE).values()

    def test_inline_marker_fallback(self):
        text = "```js\n// filename: main.js\nconsole.log(1);\n```\n"
        assert parse_project_files(text) == {"main.js": "console.log(1);"}

    def test_later_block_wins(self):
        text = "// filename: a.js\n```js\n1\n```\n// filename: a.js\n```js\n2\n```\n"
        assert parse_project_files(text) == {"a.js": "2"}

    def test_no_files(self):
        assert parse_project_files("just prose") == {}


class TestDetectLanguage:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("index.HTML", "html"),
            ("a.scss", "css"),
            ("main.mjs", "javascript"),
            ("App.tsx", "tsx"),
            ("lib.ts", "typescript"),
            ("README", "text"),
            ("data.bin", "text"),
        ],
    )
    def test_mapping(self, path, expected):
        assert detect_language(path) == expected
