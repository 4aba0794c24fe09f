"""
Pipeline Module

Contains the image pipeline and its source/decoded state.
"""

from .image_pipeline import ImagePipeline
from .state import PipelineState, PipelineStep, Resolved, Unresolved

__all__ = [
    "ImagePipeline",
    "PipelineState",
    "PipelineStep",
    "Resolved",
    "Unresolved",
]
