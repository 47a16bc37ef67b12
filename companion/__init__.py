"""
Pet Crisis Companion

Deterministic triage and conversation pipeline for people in crisis over
a lost, injured, dying or deceased pet.
"""

from companion.catalog import CompanionConfig, build_default_config
from companion.config import Settings, get_settings
from companion.pipeline import (
    CompanionPipeline,
    PipelineInput,
    PipelineOutput,
    UIDirectives,
    get_pipeline,
    process_turn,
)
from companion.handoff import HandoffPacket, generate_handoff_packet

__version__ = "0.1.0"

__all__ = [
    "CompanionConfig",
    "build_default_config",
    "Settings",
    "get_settings",
    "CompanionPipeline",
    "PipelineInput",
    "PipelineOutput",
    "UIDirectives",
    "get_pipeline",
    "process_turn",
    "HandoffPacket",
    "generate_handoff_packet",
]
