"""Safety checks for incoming messages and outgoing model replies."""

from .output_filter import UNSAFE_OUTPUT_PATTERNS, is_safe_output
from .resources import EMERGENCY_RESOURCES, EmergencyResource, generate_safety_resources_message
from .scanner import CONCERN_KEYWORDS, concern_reason, has_pattern, is_concerning

__all__ = [
    "CONCERN_KEYWORDS",
    "EMERGENCY_RESOURCES",
    "EmergencyResource",
    "UNSAFE_OUTPUT_PATTERNS",
    "concern_reason",
    "generate_safety_resources_message",
    "has_pattern",
    "is_concerning",
    "is_safe_output",
]
