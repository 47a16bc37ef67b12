"""Tests for human handoff packets."""

from datetime import datetime, timedelta, timezone

import pytest

from companion.catalog import build_default_config
from companion.config import Settings
from companion.handoff import generate_handoff_packet
from companion.pipeline import CompanionPipeline, PipelineInput


class TestHandoffPacket:
    """Test handoff packet generation."""

    @pytest.fixture
    def pipeline(self):
        return CompanionPipeline(build_default_config(), Settings(_env_file=None))

    @pytest.fixture
    def session_start(self):
        return datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)

    def test_crisis_packet(self, pipeline, session_start):
        """Test the packet carries the risk picture."""
        output = pipeline.process(PipelineInput(
            user_message="I have pills and I'm going to take them tonight",
        ))

        packet = generate_handoff_packet(
            output,
            message_count=6,
            session_start=session_start,
            now=session_start + timedelta(minutes=12, seconds=30),
        )

        assert packet.risk_tier == "CRITICAL"
        assert packet.category == "suicide_intent"
        assert packet.marker_count >= 1
        assert packet.message_count == 6
        assert packet.session_duration_minutes == 12
        assert packet.mode == "safety"
        assert packet.region == "US"
        assert packet.timestamp == "2024-03-01T20:12:30+00:00"

    def test_no_user_text(self, pipeline, session_start):
        """Test neither the message nor marker phrases leak into the packet."""
        output = pipeline.process(PipelineInput(
            user_message="I have pills and I'm going to take them tonight",
        ))
        packet = generate_handoff_packet(output, 1, session_start, now=session_start)

        serialized = str(packet.to_dict())
        assert "pills" not in serialized
        assert "tonight" not in serialized

    def test_guard_names_only(self, pipeline, session_start):
        """Test guards are reported by name without the matched phrase."""
        output = pipeline.process(PipelineInput(user_message='My friend said "I want to die"'))
        packet = generate_handoff_packet(output, 1, session_start, now=session_start)

        assert packet.guards == ("attribution",)
        assert packet.is_bystander is True
        assert packet.risk_tier == "HIGH"

    def test_clock_skew_never_negative(self, pipeline, session_start):
        """Test a start time in the future gives zero minutes."""
        output = pipeline.process(PipelineInput(user_message="My dog is sick"))
        packet = generate_handoff_packet(
            output, 1, session_start, now=session_start - timedelta(minutes=5),
        )

        assert packet.session_duration_minutes == 0
