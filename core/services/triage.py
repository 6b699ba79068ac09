"""
Severity-tier classification for symptom checks.

A submission is classified by the highest tier among the catalog symptoms it
names; lower tiers never outvote a higher one.  The wording for each tier
lives in ``POLICY`` so tests can pin it down.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable


class Tier(IntEnum):
    MILD = 1
    MODERATE = 2
    SEVERE = 3
    EMERGENCY = 4

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> 'Tier':
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"unknown severity tier: {label!r}") from None


@dataclass(frozen=True)
class TriageOutcome:
    tier: Tier
    assessment: str
    recommendation: str
    seek_medical_attention: bool


POLICY = {
    Tier.EMERGENCY: TriageOutcome(
        Tier.EMERGENCY,
        'Your symptoms indicate a potentially serious medical condition that requires immediate attention.',
        'Please seek emergency medical care immediately or call emergency services.',
        True,
    ),
    Tier.SEVERE: TriageOutcome(
        Tier.SEVERE,
        'Your symptoms may indicate a significant health concern that should be evaluated by a healthcare provider.',
        'Please contact your healthcare provider today for an evaluation.',
        True,
    ),
    Tier.MODERATE: TriageOutcome(
        Tier.MODERATE,
        'Your symptom profile suggests a moderate concern that should be monitored closely.',
        'Consider scheduling an appointment with your healthcare provider within the next few days '
        'if symptoms persist or worsen.',
        False,
    ),
    Tier.MILD: TriageOutcome(
        Tier.MILD,
        'Based on the information provided, your symptoms appear to be mild and common during the postpartum period.',
        'Continue to monitor your symptoms and practice self-care. If symptoms worsen or persist beyond 2 weeks, '
        'consult with your healthcare provider.',
        False,
    ),
}


def highest_tier(tiers: Iterable[Tier]) -> Tier:
    """Max-reduce ``tiers``; raises ``ValueError`` when empty."""
    return max(tiers)


def classify(labels: Iterable[str]) -> TriageOutcome:
    return POLICY[highest_tier(Tier.from_label(label) for label in labels)]
