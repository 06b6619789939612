"""Unit tests for preview_engine.synthesis.file_orderer."""

from __future__ import annotations

import random

from preview_engine.synthesis.file_orderer import order_component_files


class TestOrderComponentFiles:
    def test_components_first_app_last(self):
        paths = ["src/App.jsx", "src/pages/Home.jsx", "src/components/Nav.jsx", "src/components/Card.jsx"]
        assert order_component_files(paths) == [
            "src/components/Card.jsx",
            "src/components/Nav.jsx",
            "src/pages/Home.jsx",
            "src/App.jsx",
        ]

    def test_app_inside_components_is_not_moved_last(self):
        paths = ["src/components/AppBar.jsx", "src/Main.jsx"]
        assert order_component_files(paths) == ["src/components/AppBar.jsx", "src/Main.jsx"]

    def test_segment_must_match_exactly(self):
        paths = ["src/mycomponents/A.jsx", "src/components/B.jsx"]
        assert order_component_files(paths) == ["src/components/B.jsx", "src/mycomponents/A.jsx"]

    def test_deterministic_under_input_permutation(self):
        paths = ["App.jsx", "b/components/X.jsx", "a/Y.jsx", "z/AppShell.jsx", "components/W.tsx"]
        expected = order_component_files(paths)
        rng = random.Random(7)
        for _ in range(10):
            shuffled = list(paths)
            rng.shuffle(shuffled)
            assert order_component_files(shuffled) == expected

    def test_empty(self):
        assert order_component_files([]) == []
