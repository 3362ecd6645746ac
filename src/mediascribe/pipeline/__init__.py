"""Remote-asset processing pipeline."""

from mediascribe.pipeline.extraction import BraceSpanExtractor, PassthroughExtractor, ResponseExtractor
from mediascribe.pipeline.generation import GenerationInvoker
from mediascribe.pipeline.outcome import Failure, GenerationResult, PipelineOutcome, Success
from mediascribe.pipeline.readiness import PollingTick, ReadinessPoller
from mediascribe.pipeline.runner import Pipeline, run_pipeline
from mediascribe.pipeline.sinks import ArtifactSink, FileArtifactSink
from mediascribe.pipeline.upload import UploadCoordinator

__all__ = [
    "ArtifactSink",
    "BraceSpanExtractor",
    "Failure",
    "FileArtifactSink",
    "GenerationInvoker",
    "GenerationResult",
    "PassthroughExtractor",
    "Pipeline",
    "PipelineOutcome",
    "PollingTick",
    "ReadinessPoller",
    "ResponseExtractor",
    "Success",
    "UploadCoordinator",
    "run_pipeline",
]
