"""Cutting and previewing audio clips with external media tools."""

from parasite.audio.clips import AudioClipService, AudioProcessingError, FfmpegClipService

__all__ = ["AudioClipService", "AudioProcessingError", "FfmpegClipService"]
