"""Preview synthesis: source normalisation, load ordering and document assembly."""

from preview_engine.synthesis.assets import DIAGNOSTICS_SOURCE
from preview_engine.synthesis.file_orderer import order_component_files
from preview_engine.synthesis.source_normalizer import NORMALIZER_PASSES, normalize_component_source
from preview_engine.synthesis.synthesizer import (
    build_mount_harness,
    strip_local_references,
    synthesize_document,
)

__all__ = [
    "DIAGNOSTICS_SOURCE",
    "NORMALIZER_PASSES",
    "build_mount_harness",
    "normalize_component_source",
    "order_component_files",
    "strip_local_references",
    "synthesize_document",
]
