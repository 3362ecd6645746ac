"""mediascribe: transcribe and analyse audio/video files with Gemini."""

from mediascribe.pipeline import Failure, Pipeline, PipelineOutcome, Success, run_pipeline

__version__ = "0.1.0"
__all__ = [
    "Failure",
    "Pipeline",
    "PipelineOutcome",
    "Success",
    "run_pipeline",
]
