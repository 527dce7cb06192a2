# Use Cases
from src.application.usecases.fetch_transcript import FetchTranscriptUseCase

__all__ = [
    "FetchTranscriptUseCase",
]
