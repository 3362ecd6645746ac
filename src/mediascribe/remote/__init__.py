"""Remote generation service: interface and Gemini implementation."""

from mediascribe.remote.ports import HandleState, RemoteHandle, RemoteMediaService, SamplingConfig

__all__ = ["HandleState", "RemoteHandle", "RemoteMediaService", "SamplingConfig"]
