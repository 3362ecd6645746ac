"""End-to-end media → generated text pipeline."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from mediascribe.config import MediascribeConfig
from mediascribe.exceptions import PipelineError
from mediascribe.media import describe_media
from mediascribe.pipeline.extraction import BraceSpanExtractor, ResponseExtractor, get_extractor
from mediascribe.pipeline.generation import GenerationInvoker
from mediascribe.pipeline.outcome import Failure, GenerationResult, PipelineOutcome, Success
from mediascribe.pipeline.readiness import ReadinessPoller, SettledCallback, TickCallback
from mediascribe.pipeline.sinks import ArtifactSink
from mediascribe.pipeline.upload import UploadCoordinator
from mediascribe.remote.ports import RemoteMediaService, SamplingConfig

logger = logging.getLogger(__name__)


class Pipeline:
    """Sequence classify → upload → await-ready → generate → extract → persist.

    The first failing step ends the run; its error is returned as a
    :class:`Failure` rather than raised. Errors that are not
    :class:`PipelineError` (programming errors) propagate. A single instance
    keeps no per-run state and can serve concurrent runs.
    """

    def __init__(
        self,
        service: RemoteMediaService,
        *,
        sink: ArtifactSink | None = None,
        extractor: ResponseExtractor | None = None,
        poller: ReadinessPoller | None = None,
        sampling: SamplingConfig | None = None,
    ) -> None:
        self._sink = sink
        self._extractor = extractor or BraceSpanExtractor()
        self._uploader = UploadCoordinator(service)
        self._poller = poller or ReadinessPoller(service)
        self._invoker = GenerationInvoker(service, sampling)

    @classmethod
    def from_config(
        cls,
        service: RemoteMediaService,
        config: MediascribeConfig,
        *,
        sink: ArtifactSink | None = None,
        on_tick: TickCallback | None = None,
        on_settled: SettledCallback | None = None,
    ) -> Pipeline:
        return cls(
            service,
            sink=sink,
            extractor=get_extractor(config.extraction),
            poller=ReadinessPoller(
                service,
                poll_interval=config.poll_interval,
                timeout=config.poll_timeout,
                on_tick=on_tick,
                on_settled=on_settled,
            ),
            sampling=SamplingConfig(
                temperature=config.temperature,
                max_output_tokens=config.max_output_tokens,
            ),
        )

    async def run(
        self,
        path: str | os.PathLike[str],
        instructions: str,
        model: str,
        *,
        sink: ArtifactSink | None = None,
    ) -> PipelineOutcome:
        """Process one media file. ``sink`` overrides the instance sink for this run."""
        try:
            result = await self._run(Path(path), instructions, model, sink or self._sink)
        except PipelineError as exc:
            logger.error("Run for %s failed (%s): %s", path, exc.kind.value, exc)
            return Failure.from_error(exc)
        return Success(result)

    async def _run(
        self,
        path: Path,
        instructions: str,
        model: str,
        sink: ArtifactSink | None,
    ) -> GenerationResult:
        descriptor = describe_media(path)
        handle = await self._uploader.upload(descriptor)
        handle = await self._poller.await_ready(handle)
        raw_text = await self._invoker.generate(instructions, handle, model)
        extracted_text = self._extractor.extract(raw_text)

        if sink is not None:
            sink.write_raw(raw_text)
            sink.write_extracted(extracted_text)

        return GenerationResult(raw_text=raw_text, extracted_text=extracted_text)


def run_pipeline(
    pipeline: Pipeline,
    path: str | os.PathLike[str],
    instructions: str,
    model: str,
    *,
    sink: ArtifactSink | None = None,
) -> PipelineOutcome:
    """Blocking wrapper around :meth:`Pipeline.run` for synchronous callers."""
    return asyncio.run(pipeline.run(path, instructions, model, sink=sink))
