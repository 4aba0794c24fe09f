"""
Application Layer

Pipeline orchestration and state management.
"""

from .pipeline import ImagePipeline, PipelineStep

__all__ = [
    "ImagePipeline",
    "PipelineStep",
]
