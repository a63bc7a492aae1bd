#!/usr/bin/env python3
"""
Golf Swing Analysis Pipeline
Turns an uploaded video's descriptor into swing metrics, a consistency score and coaching comment
"""

import logging
import mimetypes
import os
import sys
from collections import namedtuple

import golf_config
from swing_metrics import derive_metrics, seed_for
from swing_models import ArtifactDescriptor
from swing_scoring import score

logger = logging.getLogger(__name__)

SwingReport = namedtuple('SwingReport', ['descriptor', 'seed', 'metrics', 'result'])


def descriptor_from_path(video_path):
    """Build the upload descriptor for a local video file"""
    mime_type, _ = mimetypes.guess_type(video_path)
    return ArtifactDescriptor(
        name=os.path.basename(video_path),
        size_bytes=os.path.getsize(video_path),
        mime_type=mime_type or 'application/octet-stream',
    )


def analyze_swing(descriptor):
    """Run seed -> metrics -> score for one upload"""
    seed_value = seed_for(descriptor)
    metrics = derive_metrics(seed_value, descriptor.name)
    result = score(metrics)
    logger.info(
        "Analyzed %s (%d bytes, %s): seed=%d score=%d",
        descriptor.name, descriptor.size_bytes, descriptor.mime_type,
        seed_value, result.consistency_score,
    )
    return SwingReport(descriptor, seed_value, metrics, result)


def pro_comparison(level):
    """Pro comparison insight, available to Elite members only"""
    if level == golf_config.ELITE_LEVEL:
        return golf_config.PRO_COMPARISON_NOTE
    return None


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    video_path = argv[0] if argv else 'behind-view-full-speed.mov'  # Default video

    if not os.path.exists(video_path):
        print(f"Error: Video file '{video_path}' not found")
        print("Usage: python golf_analyzer.py [video_path]")
        return 1

    print("🏌️ Golf Swing Analysis Pipeline Starting...")
    descriptor = descriptor_from_path(video_path)
    print(f"📹 Video: {descriptor.name} ({descriptor.size_bytes} bytes, {descriptor.mime_type})")

    report = analyze_swing(descriptor)
    metrics = report.metrics

    print(f"\n🔑 Seed: {report.seed}")
    print(f"  • Address angle: {metrics.address_score}°")
    print(f"  • Balance score: {metrics.balance_score}")
    print(f"  • Swing path: {metrics.swing_path.value}")
    print(f"  • Impact timing: {metrics.impact_timing.value}")
    print(f"\n🎯 Consistency score: {report.result.consistency_score}/100")
    print(f"💬 {report.result.comment.strip()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
