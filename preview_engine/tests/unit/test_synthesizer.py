"""Unit tests for preview_engine.synthesis.synthesizer."""

from __future__ import annotations

from preview_engine.models.preview import RenderMode, SynthesisOptions
from preview_engine.synthesis.assets import DIAGNOSTICS_SOURCE
from preview_engine.synthesis.synthesizer import (
    build_mount_harness,
    strip_local_references,
    synthesize_document,
)

_DOC = "<!DOCTYPE html><html><head></head><body></body></html>"


def _head_of(document: str) -> str:
    return document[document.lower().index("<head") : document.lower().index("</head>")]


class TestPassthrough:
    def test_scenario_css_inlined_and_shim_in_head(self):
        out = synthesize_document({"index.html": _DOC, "style.css": "body{margin:0}"})
        head = _head_of(out)
        assert "<style>\nbody{margin:0}\n</style>" in head
        assert DIAGNOSTICS_SOURCE in head

    def test_shim_is_first_in_head(self):
        out = synthesize_document({"index.html": "<html><head><title>T</title></head><body></body></html>"})
        assert out.index(DIAGNOSTICS_SOURCE) < out.index("<title>T</title>")

    def test_local_references_stripped_remote_kept(self):
        doc = (
            "<!DOCTYPE html><html><head>"
            '<link rel="stylesheet" href="style.css">'
            '<link rel="stylesheet" href="https://cdn.example.com/x.css">'
            "</head><body>"
            '<script src="./app.js"></script>'
            '<script src="//cdn.example.com/lib.js"></script>'
            "</body></html>"
        )
        out = synthesize_document({"index.html": doc, "app.js": "console.log(1)"})
        assert 'href="style.css"' not in out
        assert 'src="./app.js"' not in out
        assert "https://cdn.example.com/x.css" in out
        assert "//cdn.example.com/lib.js" in out

    def test_scripts_inlined_before_body_close(self):
        out = synthesize_document({"index.html": _DOC, "main.js": "window.x = 1;"})
        assert out.index("window.x = 1;") < out.index("</body>")
        assert out.index("window.x = 1;") > out.index("<body>")

    def test_framework_injected_once(self):
        doc = '<!DOCTYPE html><html><head></head><body><div class="flex p-4">x</div></body></html>'
        out = synthesize_document({"index.html": doc})
        assert out.count("https://cdn.tailwindcss.com") == 1

    def test_framework_not_duplicated_when_already_referenced(self):
        doc = (
            '<!DOCTYPE html><html><head><script src="https://cdn.tailwindcss.com"></script></head>'
            '<body><div class="flex">x</div></body></html>'
        )
        out = synthesize_document({"index.html": doc})
        assert out.count("cdn.tailwindcss.com") == 1

    def test_forced_passthrough_without_document_falls_back(self):
        out = synthesize_document({"a.js": "1"}, mode=RenderMode.PASSTHROUGH)
        assert '<div id="root"></div>' in out


class TestComponent:
    def test_scenario_mount_point_cdn_and_definition(self):
        out = synthesize_document({"src/App.jsx": "function App(){ return null; }", "src/index.css": ""})
        options = SynthesisOptions()
        assert '<div id="root"></div>' in out
        assert options.react_url in out
        assert options.react_dom_url in out
        assert options.babel_url in out
        assert "function App(){ return null; }" in out
        assert '<script type="text/babel" data-presets="react">' in out

    def test_sources_normalised_and_ordered(self):
        files = {
            "src/App.jsx": "import Nav from './components/Nav';\nexport default function App() { return <Nav />; }",
            "src/components/Nav.jsx": "export default function Nav() { return <nav />; }",
            "src/main.jsx": "ReactDOM.createRoot(document.getElementById('root')).render(<App />);",
        }
        out = synthesize_document(files)
        assert "import Nav" not in out
        assert "export default" not in out
        assert "ReactDOM.createRoot(document.getElementById('root')).render(<App />)" not in out
        assert out.index("function Nav()") < out.index("function App()")

    def test_router_and_hooks_present(self):
        out = synthesize_document({"App.jsx": "function App() { return null; }"})
        for name in ("useState", "useRoute", "var Route", "var Link", "var Switch"):
            assert name in out

    def test_project_declarations_scoped_below_router(self):
        files = {"src/App.jsx": 'const Link = (p) => <a href={p.to} />;\nfunction App() { return <Link to="/" />; }'}
        out = synthesize_document(files)
        babel = out[out.index('type="text/babel"') :]
        router_link = babel.index("var Link = function")
        block_open = babel.index("{\n// --- src/App.jsx ---")
        user_link = babel.index("const Link = (p)")
        harness = babel.index("var mountNode")
        block_close = babel.index("\n}\n</script>")
        assert router_link < block_open < user_link < harness < block_close

    def test_tsx_registers_preset(self):
        out = synthesize_document({"App.tsx": "function App(): null { return null; }"})
        assert 'data-presets="tsx,react"' in out
        assert 'Babel.registerPreset("tsx"' in out

    def test_script_close_sequence_escaped(self):
        out = synthesize_document({"App.jsx": 'function App() { return "</script>"; }'})
        assert '"<\\/script>"' in out
        babel_start = out.index('type="text/babel"')
        assert out.index("</script>", babel_start) > out.index("<\\/script>")

    def test_empty_component_leaves_harness_warning(self):
        out = synthesize_document({"Widget.jsx": "const x = 1;"})
        assert "No root component found" in out


class TestMountHarness:
    def test_candidates_in_order_with_typeof_guard(self):
        harness = build_mount_harness(("App", "Main"), "root")
        assert harness.index('["App"') < harness.index('["Main"')
        assert 'typeof App !== "undefined"' in harness
        assert "eval(" not in harness

    def test_invalid_identifiers_skipped(self):
        harness = build_mount_harness(("App", "bad-name", "1x"), "root")
        assert "bad-name" not in harness
        assert '"1x"' not in harness


class TestPlain:
    def test_empty_snapshot_is_shell(self):
        out = synthesize_document({})
        assert out.startswith("<!DOCTYPE html>")
        assert '<div id="root"></div>' in out
        assert DIAGNOSTICS_SOURCE in out
        assert "text/babel" not in out

    def test_fragment_markup_and_scripts(self):
        out = synthesize_document({"index.html": "<main>hello</main>", "app.js": "console.log('x');"})
        assert "<main>hello</main>" in out
        assert out.index("<main>hello</main>") < out.index("console.log('x');")
        assert '<div id="root"></div>' not in out

    def test_title_escaped(self):
        out = synthesize_document({}, options=SynthesisOptions(title="<b>&"))
        assert "<title>&lt;b&gt;&amp;</title>" in out


class TestStripLocalReferences:
    def test_data_urls_kept(self):
        doc = '<link rel="icon" href="data:image/png;base64,AAA">'
        assert strip_local_references(doc) == doc

    def test_root_relative_stripped(self):
        assert strip_local_references('<script type="module" src="/src/main.jsx"></script>\n') == ""
