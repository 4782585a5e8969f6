"""Creative parameter decoding.

The host hands the unit ``creativeData["AdParameters"]``, a JSON string of
the form::

    {"videoUrl": "https://cdn.example.com/ad.mp4",
     "clickThroughUrl": "https://advertiser.example.com",
     "skippableAfter": 5}

Only ``videoUrl`` is required. The decoded record is immutable.
"""

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import MissingResourceError, ParameterDecodeError


@dataclass(frozen=True)
class NeverSkippable:
    """Skip policy for creatives that can never be skipped."""

    def is_eligible(self, elapsed_sec: float) -> bool:
        return False


@dataclass(frozen=True)
class SkippableAfter:
    """Skip policy for creatives skippable after ``seconds`` of playback."""

    seconds: float

    def is_eligible(self, elapsed_sec: float) -> bool:
        return elapsed_sec >= self.seconds


SkipPolicy = NeverSkippable | SkippableAfter


@dataclass(frozen=True)
class AdParameters:
    """Decoded creative parameters for one session."""

    video_url: str
    click_through_url: str | None = None
    skip_policy: SkipPolicy = NeverSkippable()

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the wire field names (for logging)."""
        skippable_after = (
            self.skip_policy.seconds if isinstance(self.skip_policy, SkippableAfter) else None
        )
        return {
            "videoUrl": self.video_url,
            "clickThroughUrl": self.click_through_url,
            "skippableAfter": skippable_after,
        }


def _decode_skip_policy(value: Any) -> SkipPolicy:
    if value is None:
        return NeverSkippable()
    # bool is an int subclass; "true" is not a number of seconds
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParameterDecodeError(
            "skippableAfter must be a number of seconds.",
            field_name="skippableAfter",
            context={"value_type": type(value).__name__},
        )
    if not math.isfinite(value):
        raise ParameterDecodeError(
            "skippableAfter must be finite.", field_name="skippableAfter"
        )
    if value <= 0:
        return NeverSkippable()
    return SkippableAfter(float(value))


def decode_ad_parameters(creative_data: Any) -> AdParameters:
    """Decode the host's creative data into AdParameters.

    Args:
        creative_data: Mapping with an ``AdParameters`` JSON string

    Returns:
        Decoded, validated parameters

    Raises:
        ParameterDecodeError: Payload is missing, not JSON, not an object,
            or carries a field of the wrong type
        MissingResourceError: Payload has no video URL
    """
    if not isinstance(creative_data, Mapping) or "AdParameters" not in creative_data:
        raise ParameterDecodeError("Error parsing AdParameters.", field_name="AdParameters")

    raw = creative_data["AdParameters"]
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ParameterDecodeError(
            "Error parsing AdParameters.",
            payload_preview=raw if isinstance(raw, str) else None,
            context={"reason": str(e)},
        ) from e

    if not isinstance(payload, dict):
        raise ParameterDecodeError(
            "Error parsing AdParameters.",
            payload_preview=raw,
            context={"reason": "payload is not a JSON object"},
        )

    video_url = payload.get("videoUrl")
    if not video_url:
        raise MissingResourceError("Video URL not found in AdParameters.")
    if not isinstance(video_url, str):
        raise ParameterDecodeError("videoUrl must be a string.", field_name="videoUrl")

    click_through_url = payload.get("clickThroughUrl")
    if click_through_url is not None and not isinstance(click_through_url, str):
        raise ParameterDecodeError(
            "clickThroughUrl must be a string.", field_name="clickThroughUrl"
        )

    return AdParameters(
        video_url=video_url,
        click_through_url=click_through_url or None,
        skip_policy=_decode_skip_policy(payload.get("skippableAfter")),
    )


__all__ = [
    "NeverSkippable",
    "SkippableAfter",
    "SkipPolicy",
    "AdParameters",
    "decode_ad_parameters",
]
