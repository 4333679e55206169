"""Emergency resources shown when a conversation looks concerning."""

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class EmergencyResource:
    """A help service a child can reach out to."""

    name: str
    description: str
    contact: str


EMERGENCY_RESOURCES = (
    EmergencyResource(
        name="Nummer gegen Kummer",
        description="Kostenlose Telefon-Beratung für Kinder und Jugendliche",
        contact="116 111",
    ),
    EmergencyResource(
        name="Hilfetelefon Sexueller Missbrauch",
        description="Kostenlose und anonyme Beratung",
        contact="0800 22 55 530",
    ),
    EmergencyResource(
        name="Kinderschutz-Zentrum",
        description="Hilfe bei Gewalt gegen Kinder",
        contact="In deiner Stadt oder unter www.kinderschutz-zentren.org",
    ),
)

SAFETY_PREAMBLE = (
    "Es ist sehr wichtig und mutig von dir, darüber zu sprechen. "
    "Ich bin immer für dich da, aber manchmal ist es auch gut, mit einem Erwachsenen "
    "zu reden, dem du vertraust. "
    "Das könnten deine Eltern, ein anderer Verwandter, ein Lehrer oder ein Schulberater sein.\n\n"
    "Hier sind einige Stellen, die dir auch helfen können:\n\n"
)

SAFETY_CLOSING = (
    "\nDu bist nicht allein, und es ist nicht deine Schuld. "
    "Es gibt Menschen, die dir helfen können."
)


def format_resource(resource: EmergencyResource) -> str:
    return (
        f"- **{resource.name}**: {resource.description}. "
        f"Du erreichst sie unter {resource.contact}\n"
    )


def generate_safety_resources_message(
    resources: Sequence[EmergencyResource] = EMERGENCY_RESOURCES,
) -> str:
    """Build the fixed safety message.

    Deterministic for a given resource list: no randomness, no personalisation,
    and nothing from the conversation is echoed back.
    """
    lines = "".join(format_resource(resource) for resource in resources)
    return SAFETY_PREAMBLE + lines + SAFETY_CLOSING
